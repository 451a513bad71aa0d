from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from pokernight.domain import GameStatus, TransactionType


class CreateGameRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Название игры", examples=["Friday poker"])


class AddPlayerRequest(BaseModel):
    name: str = Field(..., min_length=1, examples=["alice"])


class AddTransactionRequest(BaseModel):
    player_id: str = Field(..., examples=["6f1c4f0e-5a0e-4b7e-9d51-1c2f0e0b8a11"])
    type: TransactionType = Field(..., examples=["buyin"])
    amount: Decimal = Field(..., gt=0, description="Сумма в долларах, не больше двух знаков после точки", examples=[100])

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "player_id": "6f1c4f0e-5a0e-4b7e-9d51-1c2f0e0b8a11",
                    "type": "buyin",
                    "amount": 100,
                }
            ]
        }
    }


class SetActiveGameRequest(BaseModel):
    game_id: str | None = None


class CompleteGameRequest(BaseModel):
    allow_warnings: bool = Field(
        False,
        description="Завершить игру, даже если суммы закупок и выплат не сходятся",
    )


class PlayerResponse(BaseModel):
    id: str
    name: str
    created_at: datetime


class TransactionResponse(BaseModel):
    id: str
    player_id: str
    type: TransactionType
    amount: Decimal
    timestamp: datetime


class GameResponse(BaseModel):
    id: str
    name: str
    date: datetime
    status: GameStatus
    players: list[PlayerResponse]
    transactions: list[TransactionResponse]
    created_at: datetime
    completed_at: datetime | None = None


class BalanceResponse(BaseModel):
    player_id: str
    player_name: str
    total_buyins: Decimal
    total_cashouts: Decimal
    net_balance: Decimal


class ValidationIssueResponse(BaseModel):
    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ValidationResponse(BaseModel):
    is_valid: bool
    errors: list[ValidationIssueResponse]
    warnings: list[ValidationIssueResponse]
    total_buyins: Decimal
    total_cashouts: Decimal
    net_difference: Decimal


class SettlementResponse(BaseModel):
    payer: str
    payee: str
    amount: Decimal
    payer_id: str | None = None
    payee_id: str | None = None


class SummaryResponse(BaseModel):
    game: GameResponse
    balances: list[BalanceResponse]
    settlements: list[SettlementResponse]
    total_pot: Decimal

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "game": {"id": "3ed7c88a-c4d5-453a-a437-1ad033f89a4a", "name": "Friday poker"},
                    "balances": [
                        {
                            "player_id": "p-1",
                            "player_name": "alice",
                            "total_buyins": "100.00",
                            "total_cashouts": "150.00",
                            "net_balance": "50.00",
                        }
                    ],
                    "settlements": [{"payer": "carol", "payee": "alice", "amount": "40.00"}],
                    "total_pot": "300.00",
                }
            ]
        }
    }


class CompleteGameResponse(BaseModel):
    completed: bool
    game: GameResponse
    validation: ValidationResponse
