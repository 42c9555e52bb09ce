from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "ledgerreports"
    ledger_dir: str = "tmp"  # CSV ledger files dropped by the ingestion process
    output_dir: str = "out"
    poll_interval_seconds: float = 60.0
    poll_batch_size: int = 10
    scheduler_enabled: bool = True
    debug: bool = False

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"


settings = Settings()
