from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload, sessionmaker

from pokernight.domain import Game, Player, Transaction
from pokernight.storage.models import AppStateRecord, GameRecord, PlayerRecord, TransactionRecord

logger = logging.getLogger("pokernight.storage")

ACTIVE_GAME_KEY = "active_game_id"


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _optional_utc(value: datetime | None) -> datetime | None:
    return _to_utc(value) if value is not None else None


class SqlAlchemyGameRepository:
    """Stores games, players and transactions in three tables, ordered by ``position``."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def load_games(self) -> list[Game]:
        with self._session_factory() as db:
            records = db.scalars(
                select(GameRecord)
                .options(selectinload(GameRecord.players), selectinload(GameRecord.transactions))
                .order_by(GameRecord.position)
            ).all()
            return [self._to_domain(record) for record in records]

    def save_games(self, games: Sequence[Game]) -> None:
        with self._session_factory() as db:
            db.execute(delete(TransactionRecord))
            db.execute(delete(PlayerRecord))
            db.execute(delete(GameRecord))
            db.add_all([self._to_record(game, position) for position, game in enumerate(games)])
            db.commit()
        logger.debug("saved %d games", len(games))

    def load_active_game_id(self) -> str | None:
        with self._session_factory() as db:
            record = db.get(AppStateRecord, ACTIVE_GAME_KEY)
            return record.value if record is not None else None

    def save_active_game_id(self, game_id: str | None) -> None:
        with self._session_factory() as db:
            record = db.get(AppStateRecord, ACTIVE_GAME_KEY)
            if record is None:
                db.add(AppStateRecord(key=ACTIVE_GAME_KEY, value=game_id))
            else:
                record.value = game_id
            db.commit()

    @staticmethod
    def _to_record(game: Game, position: int) -> GameRecord:
        return GameRecord(
            id=game.id,
            position=position,
            name=game.name,
            date=_to_utc(game.date),
            status=game.status.value,
            created_at=_to_utc(game.created_at),
            completed_at=_optional_utc(game.completed_at),
            players=[
                PlayerRecord(
                    id=player.id,
                    position=idx,
                    name=player.name,
                    created_at=_to_utc(player.created_at),
                )
                for idx, player in enumerate(game.players)
            ],
            transactions=[
                TransactionRecord(
                    id=txn.id,
                    position=idx,
                    player_id=txn.player_id,
                    type=txn.type.value,
                    amount_cents=int(txn.amount * 100),
                    timestamp=_to_utc(txn.timestamp),
                )
                for idx, txn in enumerate(game.transactions)
            ],
        )

    @staticmethod
    def _to_domain(record: GameRecord) -> Game:
        return Game(
            id=record.id,
            name=record.name,
            date=_to_utc(record.date),
            status=record.status,
            created_at=_to_utc(record.created_at),
            completed_at=_optional_utc(record.completed_at),
            players=tuple(
                Player(id=player.id, name=player.name, created_at=_to_utc(player.created_at))
                for player in record.players
            ),
            transactions=tuple(
                Transaction(
                    id=txn.id,
                    player_id=txn.player_id,
                    type=txn.type,
                    amount=Decimal(txn.amount_cents) / 100,
                    timestamp=_to_utc(txn.timestamp),
                )
                for txn in record.transactions
            ),
        )
