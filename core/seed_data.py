"""Données de démonstration insérées au premier démarrage (comptes et catalogue quincaillerie)."""

from __future__ import annotations

import logging
from typing import Any

from .repositories.base import CatalogStore, UserStore
from .repositories.users import ROLE_ADMIN, ROLE_ASSOCIATE
from .user_service import create_user

logger = logging.getLogger(__name__)

DEFAULT_USERS: tuple[dict[str, str], ...] = (
    {"email": "admin@stockpile.com", "password": "admin123", "role": ROLE_ADMIN},
    {"email": "user@stockpile.com", "password": "user123", "role": ROLE_ASSOCIATE},
)

DEFAULT_PRODUCTS: tuple[dict[str, Any], ...] = (
    {
        "name": "Hammer - Claw 16oz",
        "description": "Standard claw hammer with rubber grip",
        "category": "Tools",
        "brand": "Stanley",
        "sku": "TOO-001",
        "barcode": "123456789",
        "current_stock": 25,
        "min_stock_level": 10,
        "max_stock_level": 50,
        "cost_price": "12.50",
        "selling_price": "24.99",
        "supplier": "Stanley Tools Inc",
        "location": "A1-B2",
    },
    {
        "name": "Screwdriver Set",
        "description": "6-piece precision screwdriver set",
        "category": "Tools",
        "brand": "Craftsman",
        "sku": "TOO-002",
        "barcode": "234567890",
        "current_stock": 5,
        "min_stock_level": 15,
        "max_stock_level": 40,
        "cost_price": "8.00",
        "selling_price": "15.99",
        "supplier": "Craftsman Supply",
        "location": "A1-B3",
    },
    {
        "name": "LED Bulb 60W",
        "description": "Energy efficient LED bulb, warm white",
        "category": "Electrical",
        "brand": "Philips",
        "sku": "ELE-001",
        "barcode": "345678901",
        "current_stock": 0,
        "min_stock_level": 20,
        "max_stock_level": 100,
        "cost_price": "3.50",
        "selling_price": "7.99",
        "supplier": "Philips Lighting",
        "location": "C2-D1",
    },
    {
        "name": 'PVC Pipe 2"',
        "description": "2 inch PVC pipe, 10ft length",
        "category": "Plumbing",
        "brand": "Charlotte",
        "sku": "PLU-001",
        "barcode": "456789012",
        "current_stock": 8,
        "min_stock_level": 10,
        "max_stock_level": 30,
        "cost_price": "15.00",
        "selling_price": "28.99",
        "supplier": "Charlotte Pipe Co",
        "location": "E3-F2",
    },
    {
        "name": "Paint Brush Set",
        "description": "Professional paint brush set, 5 pieces",
        "category": "Paint & Supplies",
        "brand": "Purdy",
        "sku": "PAI-001",
        "barcode": "567890123",
        "current_stock": 35,
        "min_stock_level": 20,
        "max_stock_level": 60,
        "cost_price": "18.00",
        "selling_price": "34.99",
        "supplier": "Purdy Corp",
        "location": "D2-E1",
    },
)


def seed_defaults(catalog: CatalogStore, users: UserStore, **hash_options: Any) -> dict[str, int]:
    """Insère comptes et produits par défaut lorsque les tables correspondantes sont vides."""

    created = {"users": 0, "products": 0}
    if users.count() == 0:
        for account in DEFAULT_USERS:
            create_user(users, account["email"], account["password"], account["role"], **hash_options)
            created["users"] += 1

    if not catalog.list():
        for fields in DEFAULT_PRODUCTS:
            catalog.create(fields)
            created["products"] += 1

    if created["users"] or created["products"]:
        logger.info(
            "Données par défaut insérées: %s utilisateurs, %s produits",
            created["users"],
            created["products"],
        )
    return created


__all__ = ["DEFAULT_PRODUCTS", "DEFAULT_USERS", "seed_defaults"]
