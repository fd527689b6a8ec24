import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    FLASK_ENV = os.getenv("FLASK_ENV", "production")
    FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
    FLASK_PORT = int(os.getenv("FLASK_PORT", "6000"))

    DB_HOST = os.getenv("DB_HOST", "127.0.0.1")
    DB_PORT = int(os.getenv("DB_PORT", "5432"))
    DB_NAME = os.getenv("DB_NAME", "scm_ai")
    DB_USER = os.getenv("DB_USER", "postgres")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "postgres")

    SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

    # "sql" reads demand_history; "synthetic" fabricates a series per product
    HISTORY_SOURCE = os.getenv("HISTORY_SOURCE", "sql")
    HISTORY_SEED = int(os.environ["HISTORY_SEED"]) if os.getenv("HISTORY_SEED") else None

    @property
    def DATABASE_URL(self):
        override = os.getenv("DATABASE_URL")
        if override:
            return override
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


config = Config()
