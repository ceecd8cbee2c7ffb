"""Exceptions métier partagées par les services Stockpile."""

from __future__ import annotations


class StockpileError(Exception):
    """Exception de base pour les opérations catalogue et session."""


class NotFoundError(StockpileError):
    """Levée lorsqu'aucun produit ne correspond à l'identifiant demandé."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Produit {product_id} introuvable.")
        self.product_id = product_id


class InvalidCredentialsError(StockpileError):
    """Levée lorsque le couple email / mot de passe ne correspond à aucun utilisateur."""

    def __init__(self, message: str = "Email ou mot de passe invalide.") -> None:
        super().__init__(message)


class PermissionDeniedError(StockpileError):
    """Levée lorsque le rôle de l'utilisateur ne permet pas l'action."""


class StoreUnavailableError(StockpileError):
    """Levée lorsque le stockage sous-jacent (fichier JSON ou base SQL) échoue."""


class ValidationError(StockpileError, ValueError):
    """Levée pour une saisie refusée (quantité négative, nom vide...)."""


__all__ = [
    "StockpileError",
    "NotFoundError",
    "InvalidCredentialsError",
    "PermissionDeniedError",
    "StoreUnavailableError",
    "ValidationError",
]
