"""FastAPI application exposing the Stockpile inventory features for the SPA."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api import auth as auth_router
from backend.api import catalog as catalog_router
from backend.api import dashboard as dashboard_router
from backend.api import reports as reports_router
from backend.api import restock as restock_router
from backend.dependencies.security import get_current_user
from backend.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
]


@lru_cache
def create_app() -> FastAPI:
    """Construit l'application FastAPI ainsi que tous les routeurs de domaine."""

    settings = Settings.load()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Stockpile API",
        version="1.0.0",
        description="""
## API de gestion de stock pour quincaillerie

- **Catalogue** : consultation, recherche et filtres ; ajout, modification et suppression réservés aux administrateurs
- **Réassort** : produits à réapprovisionner, quantités suggérées et validation
- **Tableau de bord** et **rapports** : valorisation, répartition par catégorie, export CSV

### Authentification
OAuth2 avec jetons JWT. Obtenez un jeton via `/auth/token` (le champ `username` porte l'e-mail).
        """,
        openapi_tags=[
            {"name": "auth", "description": "Authentification et gestion des tokens"},
            {"name": "catalog", "description": "Catalogue produits"},
            {"name": "restock", "description": "Réapprovisionnement"},
            {"name": "dashboard", "description": "Indicateurs du tableau de bord"},
            {"name": "reports", "description": "Rapports et export CSV"},
        ],
        docs_url="/docs",
        redoc_url="/redoc",
    )

    allowed_origins = settings.cors_allowed_origins or DEFAULT_ALLOWED_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials="*" not in allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router.router)

    # Toutes les routes métier exigent un jeton valide ; les rôles sont contrôlés par les services.
    inventory_router = APIRouter(dependencies=[Depends(get_current_user)])
    inventory_router.include_router(catalog_router.router)
    inventory_router.include_router(restock_router.router)
    inventory_router.include_router(dashboard_router.router)
    inventory_router.include_router(reports_router.router)
    app.include_router(inventory_router)

    @app.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    logger.info("Stockpile API prête (backend catalogue: %s)", settings.catalog_backend)
    return app


app = create_app()
