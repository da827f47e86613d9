"""Game API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.schemas import (
    ActionResponse,
    ChoiceRequest,
    ErrorInfo,
    ErrorResponse,
    GameStateResponse,
    ItemInfo,
    MenuInfo,
    PlayerInfo,
    StartRequest,
    UseItemRequest,
)
from src.core.engine import ActionResult
from src.core.logging import get_logger
from src.core.player import GameState
from src.services.game_service import GameService, SessionNotFoundError

logger = get_logger(__name__)

router = APIRouter(prefix="/game", tags=["game"])

NOT_FOUND = {404: {"model": ErrorResponse}}


def get_game_service(request: Request) -> GameService:
    """GameService 인스턴스 반환 (의존성 주입)"""
    service: GameService = request.app.state.game_service
    return service


def _build_player_info(state: GameState) -> PlayerInfo:
    """GameState를 PlayerInfo로 변환"""
    player = state.player
    return PlayerInfo(
        name=player.name,
        health=player.health,
        gold=player.gold,
        location=player.location.key,
        inventory=[ItemInfo(**item) for item in state.inventory.to_list()],
    )


def _build_state_response(service: GameService, state: GameState) -> GameStateResponse:
    """GameState를 GameStateResponse로 변환. 종료된 게임은 메뉴 없음."""
    menu = None
    if state.is_running:
        location = state.player.location
        menu = MenuInfo(
            location=location.display_name,
            description=location.description,
            options=service.engine.render_menu(state),
        )
    return GameStateResponse(
        game_id=state.game_id,
        turn=state.turn,
        player=_build_player_info(state),
        awaiting_item=state.awaiting_item,
        menu=menu,
        game_over=state.game_over,
        victory=state.victory,
        quit=state.quit,
        stats=service.stats(state.game_id).to_dict(),
    )


def _build_action_response(
    service: GameService, state: GameState, result: ActionResult
) -> ActionResponse:
    return ActionResponse(
        success=result.success,
        action=result.action_type,
        message=result.message,
        error=ErrorInfo(**result.error.to_dict()) if result.error else None,
        data=result.data,
        state=_build_state_response(service, state),
    )


def _get_state_or_404(service: GameService, game_id: str) -> GameState:
    try:
        return service.get_session(game_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/start", response_model=GameStateResponse)
def start_game(
    request: StartRequest,
    service: GameService = Depends(get_game_service),
) -> GameStateResponse:
    """
    새 게임 시작

    체력 100, 골드 20으로 마을에서 시작합니다.
    """
    state = service.start_game(request.player_name)
    logger.info("Game started via API: %s", state.game_id)
    return _build_state_response(service, state)


@router.get("/{game_id}", response_model=GameStateResponse, responses=NOT_FOUND)
def get_game_state(
    game_id: str,
    service: GameService = Depends(get_game_service),
) -> GameStateResponse:
    """현재 상태 + 장소 메뉴 조회"""
    state = _get_state_or_404(service, game_id)
    return _build_state_response(service, state)


@router.post("/{game_id}/choice", response_model=ActionResponse, responses=NOT_FOUND)
def choose(
    game_id: str,
    request: ChoiceRequest,
    service: GameService = Depends(get_game_service),
) -> ActionResponse:
    """
    메뉴 선택

    잘못된 입력은 200 + error(invalid_input) 으로 응답하며 상태는 변하지 않습니다.
    """
    state = _get_state_or_404(service, game_id)
    result = service.choose(game_id, request.choice)
    return _build_action_response(service, state, result)


@router.post("/{game_id}/use", response_model=ActionResponse, responses=NOT_FOUND)
def use_item(
    game_id: str,
    request: UseItemRequest,
    service: GameService = Depends(get_game_service),
) -> ActionResponse:
    """
    인벤토리 아이템 사용 (번호는 1부터)

    직전 choice 가 "Use item" 이어야 합니다 (state.awaiting_item).
    """
    state = _get_state_or_404(service, game_id)
    result = service.use_item(game_id, request.index)
    return _build_action_response(service, state, result)


@router.delete("/{game_id}", responses=NOT_FOUND)
def end_game(
    game_id: str,
    service: GameService = Depends(get_game_service),
) -> dict[str, str]:
    """세션 종료 및 삭제"""
    _get_state_or_404(service, game_id)
    service.end_game(game_id)
    return {"status": "ended", "game_id": game_id}
