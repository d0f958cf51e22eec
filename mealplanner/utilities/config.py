"""Configuration management for the Meal Planner backend."""
import os
from typing import Final
from pathlib import Path

# Load environment variables from .env file if it exists
from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)
else:
    load_dotenv()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = BASE_DIR / 'data'


def _database_url() -> str:
    """Resolve the store URL: DATABASE_URL, then DB_* parts (PostgreSQL), then a local SQLite file."""
    url = os.getenv('DATABASE_URL')
    if url:
        return url
    if os.getenv('DB_HOST'):
        host = os.getenv('DB_HOST', 'localhost')
        port = os.getenv('DB_PORT', '5432')
        user = os.getenv('DB_USER', 'postgres')
        password = os.getenv('DB_PASSWORD', '')
        name = os.getenv('DB_NAME', 'mealplanner')
        return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{name}"
    return f"sqlite:///{DATA_DIR / 'mealplanner.db'}"


# Database
DATABASE_URL: Final[str] = _database_url()

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8080'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Seed data
SEED_CSV: Final[Path] = Path(os.getenv('SEED_CSV', str(DATA_DIR / 'Meal_db.csv')))
