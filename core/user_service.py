import hmac  # Comparaison sécurisée des hash
import hashlib  # Fonctions de hachage (PBKDF2)
import logging  # Journalisation
import secrets  # Génération de sels cryptographiques

from .errors import InvalidCredentialsError, ValidationError  # Erreurs métier
from .repositories.base import UserStore  # Interface du store utilisateurs
from .repositories.users import ALLOWED_ROLES, ROLE_ASSOCIATE, User  # Entité et rôles


_PASSWORD_ITERATIONS = 390_000  # Nombre d'itérations PBKDF2
_HASH_ALGO = "pbkdf2_sha256"  # Identifiant de l'algorithme utilisé

logger = logging.getLogger(__name__)


def hash_password(password: str, *, iterations: int = _PASSWORD_ITERATIONS) -> str:
    """Hache via PBKDF2 et fournit un format compatible avec `django-style`."""
    salt = secrets.token_bytes(16)  # Génère un sel aléatoire de 16 octets
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{_HASH_ALGO}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    try:  # Tente de découper le format encodé
        algorithm, iter_str, salt_hex, digest_hex = encoded.split("$")
    except ValueError:  # Format incorrect
        return False

    if algorithm != _HASH_ALGO:  # Vérifie l'algorithme attendu
        return False

    try:  # Convertit les paramètres
        iterations = int(iter_str)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
    except ValueError:
        return False

    computed = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(computed, expected)  # Compare en timing-safe


def normalize_email(value: str) -> str:
    return (value or "").strip().lower()  # Les emails sont stockés en minuscules


def authenticate_user(store: UserStore, email: str, password: str) -> User:
    """Valide les identifiants et retourne l'utilisateur sans le hash."""

    if not email or not password:  # Saisie incomplète
        raise InvalidCredentialsError()

    account = store.get_by_email(normalize_email(email))
    if account is None or not verify_password(password, account.password_hash):
        logger.info("Échec de connexion pour %s", normalize_email(email))
        raise InvalidCredentialsError()

    return account.user


def create_user(
    store: UserStore,
    email: str,
    password: str,
    role: str = ROLE_ASSOCIATE,
    *,
    iterations: int = _PASSWORD_ITERATIONS,
) -> User:
    """Crée un utilisateur et retourne ses métadonnées (sans hash)."""

    email = normalize_email(email)
    password = (password or "").strip()
    role = (role or ROLE_ASSOCIATE).strip().lower()

    if "@" not in email or len(email) < 5:  # Validation simple de l'email
        raise ValidationError("Adresse e-mail invalide.")
    if len(password) < 6:  # Les comptes par défaut utilisent 7 caractères
        raise ValidationError("Le mot de passe doit contenir au moins 6 caractères.")
    if role not in ALLOWED_ROLES:
        raise ValidationError(f"Rôle invalide. Choisissez parmi {', '.join(ALLOWED_ROLES)}.")
    if store.get_by_email(email) is not None:
        raise ValidationError("Cette adresse e-mail est déjà utilisée.")

    account = store.add(email, hash_password(password, iterations=iterations), role)
    return account.user


__all__ = [
    "authenticate_user",
    "create_user",
    "hash_password",
    "normalize_email",
    "verify_password",
]
