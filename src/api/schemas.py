"""API request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class StartRequest(BaseModel):
    """새 게임 시작 요청"""

    player_name: str = Field(..., min_length=1, max_length=50, description="모험가 이름")


class ChoiceRequest(BaseModel):
    """메뉴 선택 요청. 원시 입력 그대로 받고 엔진이 검증한다."""

    choice: str = Field(..., max_length=20, description="메뉴 번호 (1부터)")


class UseItemRequest(BaseModel):
    """아이템 사용 요청"""

    index: str = Field(..., max_length=20, description="아이템 번호 (1부터)")


# === Response Schemas ===


class ItemInfo(BaseModel):
    """인벤토리 아이템"""

    instance_id: str
    name: str
    type: str
    cost: int
    effect: int
    description: str = ""


class PlayerInfo(BaseModel):
    """플레이어 정보"""

    name: str
    health: int
    gold: int
    location: str
    inventory: list[ItemInfo] = []


class MenuInfo(BaseModel):
    """현재 장소 메뉴"""

    location: str
    description: str
    options: list[str]


class GameStateResponse(BaseModel):
    """게임 상태 응답"""

    game_id: str
    turn: int
    player: PlayerInfo
    awaiting_item: bool = False
    menu: Optional[MenuInfo] = None
    game_over: bool = False
    victory: bool = False
    quit: bool = False
    stats: dict[str, Any] = {}


class ErrorInfo(BaseModel):
    """복구 가능한 게임 오류"""

    kind: str
    message: str


class ActionResponse(BaseModel):
    """행동 실행 응답"""

    success: bool
    action: str
    message: str
    error: Optional[ErrorInfo] = None
    data: Optional[dict[str, Any]] = None
    state: GameStateResponse


class ErrorResponse(BaseModel):
    """에러 응답"""

    success: bool = False
    error: str
    detail: Optional[str] = None
