from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import PlainTextResponse

from pokernight.api.errors import api_error, domain_error
from pokernight.api.schemas import (
    AddPlayerRequest,
    AddTransactionRequest,
    BalanceResponse,
    CompleteGameRequest,
    CompleteGameResponse,
    CreateGameRequest,
    GameResponse,
    PlayerResponse,
    SetActiveGameRequest,
    SettlementResponse,
    SummaryResponse,
    TransactionResponse,
    ValidationIssueResponse,
    ValidationResponse,
)
from pokernight.domain import (
    DomainValidationError,
    Game,
    GameStatus,
    PlayerBalance,
    Settlement,
    Validation,
    ValidationIssue,
)
from pokernight.runtime import get_service
from pokernight.service import LedgerService
from pokernight.services.share_text import render_summary_text

router = APIRouter(prefix="/games", tags=["games"])


def _game_response(game: Game) -> GameResponse:
    return GameResponse(
        id=game.id,
        name=game.name,
        date=game.date,
        status=game.status,
        players=[PlayerResponse(id=p.id, name=p.name, created_at=p.created_at) for p in game.players],
        transactions=[
            TransactionResponse(
                id=t.id,
                player_id=t.player_id,
                type=t.type,
                amount=t.amount,
                timestamp=t.timestamp,
            )
            for t in game.transactions
        ],
        created_at=game.created_at,
        completed_at=game.completed_at,
    )


def _balance_response(balance: PlayerBalance) -> BalanceResponse:
    return BalanceResponse(
        player_id=balance.player_id,
        player_name=balance.player_name,
        total_buyins=balance.total_buyins,
        total_cashouts=balance.total_cashouts,
        net_balance=balance.net_balance,
    )


def _settlement_response(settlement: Settlement) -> SettlementResponse:
    return SettlementResponse(
        payer=settlement.payer,
        payee=settlement.payee,
        amount=settlement.amount,
        payer_id=settlement.payer_id,
        payee_id=settlement.payee_id,
    )


def _issue_response(issue: ValidationIssue) -> ValidationIssueResponse:
    return ValidationIssueResponse(code=issue.code.value, message=issue.message, details=dict(issue.details))


def _validation_response(validation: Validation) -> ValidationResponse:
    return ValidationResponse(
        is_valid=validation.is_valid,
        errors=[_issue_response(issue) for issue in validation.errors],
        warnings=[_issue_response(issue) for issue in validation.warnings],
        total_buyins=validation.total_buyins,
        total_cashouts=validation.total_cashouts,
        net_difference=validation.net_difference,
    )


@router.post(
    "",
    response_model=GameResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать новую игру",
)
def create_game(payload: CreateGameRequest, service: LedgerService = Depends(get_service)) -> GameResponse:
    try:
        game = service.create_game(payload.name)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return _game_response(game)


@router.get("", response_model=list[GameResponse], summary="Список игр")
def list_games(
    status_filter: GameStatus | None = Query(default=None, alias="status"),
    service: LedgerService = Depends(get_service),
) -> list[GameResponse]:
    return [_game_response(game) for game in service.list_games(status_filter)]


@router.get("/active", response_model=GameResponse, summary="Текущая активная игра")
def get_active_game(service: LedgerService = Depends(get_service)) -> GameResponse:
    game = service.get_active_game()
    if game is None:
        raise api_error(
            code="no_active_game",
            message="Активная игра не выбрана",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return _game_response(game)


@router.put("/active", summary="Выбрать активную игру")
def set_active_game(payload: SetActiveGameRequest, service: LedgerService = Depends(get_service)) -> dict:
    try:
        service.set_active_game(payload.game_id)
    except DomainValidationError as exc:
        raise domain_error(exc, id=payload.game_id) from exc
    return {"game_id": payload.game_id}


@router.get("/{id}", response_model=GameResponse, summary="Получить игру")
def get_game(id: str, service: LedgerService = Depends(get_service)) -> GameResponse:
    try:
        return _game_response(service.get_game(id))
    except DomainValidationError as exc:
        raise domain_error(exc, id=id) from exc


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, summary="Удалить игру")
def delete_game(id: str, service: LedgerService = Depends(get_service)) -> Response:
    try:
        service.delete_game(id)
    except DomainValidationError as exc:
        raise domain_error(exc, id=id) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{id}/players",
    response_model=PlayerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Добавить игрока",
)
def add_player(id: str, payload: AddPlayerRequest, service: LedgerService = Depends(get_service)) -> PlayerResponse:
    try:
        player = service.add_player(id, payload.name)
    except DomainValidationError as exc:
        raise domain_error(exc, id=id) from exc
    return PlayerResponse(id=player.id, name=player.name, created_at=player.created_at)


@router.post(
    "/{id}/transactions",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Записать закупку или выплату",
)
def add_transaction(
    id: str,
    payload: AddTransactionRequest,
    service: LedgerService = Depends(get_service),
) -> TransactionResponse:
    try:
        transaction = service.add_transaction(id, payload.player_id, payload.type, payload.amount)
    except DomainValidationError as exc:
        raise domain_error(exc, id=id, player_id=payload.player_id) from exc
    return TransactionResponse(
        id=transaction.id,
        player_id=transaction.player_id,
        type=transaction.type,
        amount=transaction.amount,
        timestamp=transaction.timestamp,
    )


@router.get("/{id}/balances", response_model=list[BalanceResponse], summary="Балансы игроков")
def get_balances(id: str, service: LedgerService = Depends(get_service)) -> list[BalanceResponse]:
    try:
        return [_balance_response(balance) for balance in service.get_balances(id)]
    except DomainValidationError as exc:
        raise domain_error(exc, id=id) from exc


@router.get("/{id}/validation", response_model=ValidationResponse, summary="Проверить леджер")
def get_validation(id: str, service: LedgerService = Depends(get_service)) -> ValidationResponse:
    try:
        return _validation_response(service.validate_game(id))
    except DomainValidationError as exc:
        raise domain_error(exc, id=id) from exc


@router.post("/{id}/complete", response_model=CompleteGameResponse, summary="Завершить игру")
def complete_game(
    id: str,
    payload: CompleteGameRequest | None = None,
    service: LedgerService = Depends(get_service),
) -> CompleteGameResponse:
    allow_warnings = payload.allow_warnings if payload is not None else False
    try:
        result = service.complete_game(id, allow_warnings=allow_warnings)
    except DomainValidationError as exc:
        raise domain_error(exc, id=id) from exc

    validation = _validation_response(result.validation)
    if not result.completed:
        raise api_error(
            code="ledger_not_settleable" if not result.validation.is_valid else "ledger_has_warnings",
            message="Игру нельзя завершить без исправлений" if not result.validation.is_valid
            else "Суммы не сходятся, подтвердите завершение",
            details=validation.model_dump(mode="json"),
            status_code=status.HTTP_409_CONFLICT,
        )
    return CompleteGameResponse(completed=True, game=_game_response(result.game), validation=validation)


@router.get("/{id}/summary", response_model=SummaryResponse, summary="Итоги и расчеты")
def get_summary(id: str, service: LedgerService = Depends(get_service)) -> SummaryResponse:
    try:
        summary = service.get_summary(id)
    except DomainValidationError as exc:
        raise domain_error(exc, id=id) from exc
    return SummaryResponse(
        game=_game_response(summary.game),
        balances=[_balance_response(balance) for balance in summary.balances],
        settlements=[_settlement_response(settlement) for settlement in summary.settlements],
        total_pot=summary.total_pot,
    )


@router.get("/{id}/summary/text", response_class=PlainTextResponse, summary="Итоги в виде текста")
def get_summary_text(id: str, service: LedgerService = Depends(get_service)) -> str:
    try:
        return render_summary_text(service.get_summary(id))
    except DomainValidationError as exc:
        raise domain_error(exc, id=id) from exc
