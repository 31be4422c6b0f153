import logging

from passlib.context import CryptContext
from core.entities.user import User
from core.errors import EmailAlreadyExists, IncorrectCredentials, UserNotFound
from core.repositories.user_repository import UserRepository


logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)

def normalize_email(email: str) -> str:
    return email.strip().lower()

def register_user(repo: UserRepository, name: str, email: str, password: str) -> User:
    name = name.strip()
    if not name:
        raise ValueError("Name must not be blank")
    email = normalize_email(email)
    existing = repo.get_by_email(email)
    if existing is not None:
        raise EmailAlreadyExists()
    password_hash = get_password_hash(password)
    user = repo.create_user(name=name, email=email, password_hash=password_hash)
    logger.info("Registered user %s", user.id)
    return user

def authenticate_user(repo: UserRepository, email: str, password: str) -> User:
    # unknown email and wrong password are reported identically
    user = repo.get_by_email(normalize_email(email))
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed authentication attempt")
        raise IncorrectCredentials()
    return user

def show_user_profile(repo: UserRepository, user_id: str) -> User:
    user = repo.get_by_id(user_id)
    if user is None:
        raise UserNotFound()
    return user
