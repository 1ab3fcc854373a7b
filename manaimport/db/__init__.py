from manaimport.db.database import create_engine, create_session_factory, drop_db, init_db
from manaimport.db.gateway import CardStore, SqlCardStore
from manaimport.db.operations import (
    count_cards,
    delete_all_cards,
    delete_all_summaries,
    get_cards,
    get_summaries,
    insert_cards,
    insert_summary,
    record_to_model,
    summary_to_model,
)

__all__ = [
    "CardStore",
    "SqlCardStore",
    "count_cards",
    "create_engine",
    "create_session_factory",
    "delete_all_cards",
    "delete_all_summaries",
    "drop_db",
    "get_cards",
    "get_summaries",
    "init_db",
    "insert_cards",
    "insert_summary",
    "record_to_model",
    "summary_to_model",
]
