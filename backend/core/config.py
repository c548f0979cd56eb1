"""
Application configuration.
Connection strings and mail credentials are loaded from environment
variables (or etc/app.conf).  The defaults below target a local developer
MySQL instance and are not meant for production.
"""

from pathlib import Path

from pydantic_settings import BaseSettings

# Project root is two levels up from this file  (backend/core/config.py → project/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    # Database
    database_url: str = "mysql+pymysql://root:@localhost:3306/auth_system"

    # Hard cap on concurrent DB connections.  Requests beyond the cap queue
    # for a free connection instead of failing.
    db_pool_size: int = 10

    # uvicorn listening port when started via ``python backend/main.py``
    port: int = 5000

    # The SPA origin.  Used for CORS and as the base of password-reset links.
    frontend_url: str = "http://localhost:3000"

    # Outbound mail (Gmail with an App Password by default)
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    gmail_user: str = ""
    gmail_app_password: str = ""
    mail_sender_name: str = "Document System"

    reset_token_expire_minutes: int = 15

    # pbkdf2_sha256 work factor
    password_hash_rounds: int = 600_000

    # Used only by seed_admin.py to bootstrap the first admin account.
    first_admin_username: str = ""
    first_admin_email: str = ""
    first_admin_contact: str = ""
    first_admin_password: str = ""

    # app.conf lives in etc/ – resolved relative to the project root so that
    # the file is found regardless of the working directory.
    model_config = {"env_file": str(_PROJECT_ROOT / "etc" / "app.conf")}


# Module-level singleton – import this everywhere: from core.config import settings
settings = Settings()
