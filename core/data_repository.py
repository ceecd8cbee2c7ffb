"""Accès SQL bas niveau (engine SQLAlchemy, lectures en DataFrame, écritures)."""

from __future__ import annotations

from functools import lru_cache  # Cache standard pour l'engine

import pandas as pd  # Bibliothèque de manipulation de données tabulaires
from sqlalchemy import create_engine, text  # Création d'engine et requêtes SQL
from sqlalchemy.engine import Engine  # Type du moteur SQLAlchemy
from sqlalchemy.sql.elements import ClauseElement  # Type des expressions SQLAlchemy

from .database_url import get_database_url
from .settings import AppSettings


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Retourne le moteur SQLAlchemy, mis en cache via functools."""
    settings = AppSettings.load()
    database_url = settings.database_url or get_database_url()
    kwargs = {"pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        # SQLite n'accepte pas pool_size/max_overflow.
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs.update(
            {
                "pool_size": max(1, settings.db_pool_size),
                "max_overflow": max(0, settings.db_pool_max_overflow),
            }
        )
    return create_engine(database_url, **kwargs)


def _normalize_statement(sql: str | ClauseElement) -> ClauseElement:
    if isinstance(sql, str):  # Requête brute
        return text(sql)
    if isinstance(sql, ClauseElement):  # Déjà une expression SQL
        return sql
    raise TypeError("sql must be a string or SQLAlchemy ClauseElement")


def query_df(sql: str | ClauseElement, params=None, *, engine: Engine | None = None) -> pd.DataFrame:
    """Exécute une requête SELECT et retourne le résultat sous forme de DataFrame Pandas."""
    statement = _normalize_statement(sql)
    if params is not None and not isinstance(params, dict):
        raise TypeError("params must be a mapping when provided")

    eng = engine or get_engine()
    with eng.begin() as conn:  # Ouvre une transaction en lecture
        result = conn.execute(statement, params or {})
        columns = list(result.keys())
        rows = result.fetchall()

    if not rows:  # Aucune ligne : DataFrame vide mais colonnes conservées
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([tuple(row) for row in rows], columns=columns)


def exec_sql(sql: str | ClauseElement, params=None, *, engine: Engine | None = None) -> int:
    """
    Exécute une requête d'écriture (INSERT, UPDATE, DELETE) et retourne le nombre de lignes touchées.
    Supporte l'exécution en lot si params est une liste.
    """
    statement = _normalize_statement(sql)
    eng = engine or get_engine()
    with eng.begin() as conn:
        if isinstance(params, list):  # Exécution en lot
            result = conn.execute(statement, params)
        elif params is None:
            result = conn.execute(statement)
        else:
            result = conn.execute(statement, params)
        return int(result.rowcount or 0)


__all__ = ["get_engine", "query_df", "exec_sql"]
