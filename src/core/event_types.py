"""이벤트 유형 상수

엔진이 행동 처리 후 발행하는 이벤트.
데이터에는 game_id 와 작은 스칼라 값만 싣는다.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # session
    GAME_STARTED = "game_started"
    GAME_QUIT = "game_quit"

    # navigation
    PLAYER_MOVED = "player_moved"

    # item
    ITEM_PURCHASED = "item_purchased"
    ITEM_USED = "item_used"

    # combat
    COMBAT_ENDED = "combat_ended"
    PLAYER_DEFEATED = "player_defeated"
    DRAGON_SLAIN = "dragon_slain"

    # engine
    TURN_PROCESSED = "turn_processed"
