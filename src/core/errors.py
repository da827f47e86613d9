"""게임 오류 분류

플레이어 입력으로 생기는 오류는 전부 복구 가능한 결과값이다.
예외로 던지지 않고 ActionResult.error 에 실어 보낸다.
"""

from dataclasses import dataclass
from enum import Enum


class GameErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"  # 숫자가 아니거나 메뉴 범위 밖
    ILLEGAL_TRANSITION = "illegal_transition"  # 장비 조건 미충족 이동
    INSUFFICIENT_FUNDS = "insufficient_funds"  # 골드 부족
    EMPTY_SELECTION = "empty_selection"  # 빈 인벤토리/상점 목록
    UNKNOWN_ITEM = "unknown_item"  # 카탈로그에 없는 아이템
    GAME_OVER = "game_over"  # 이미 끝난 게임에 대한 행동


@dataclass(frozen=True)
class GameError:
    """복구 가능한 오류"""

    kind: GameErrorKind
    message: str

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}
