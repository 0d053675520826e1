from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
  model_config = SettingsConfigDict(env_file=".env", extra="ignore")

  database_url: str = "postgresql+asyncpg://taskboard:taskboard@db:5432/taskboard"
  auto_create_tables: bool = False
  app_secret: str = "dev-secret-change-me"
  app_version: str = "v2026-10-19"

  token_ttl_hours: int = 6
  bcrypt_rounds: int = 12

  debug: bool = False
  log_level: str = "INFO"

  rate_limit_auth_ip_per_minute: int = 30

  cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
  trusted_hosts: str = "localhost,127.0.0.1,0.0.0.0,api,test"

  def cors_origin_list(self) -> list[str]:
    return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

  def trusted_host_list(self) -> list[str]:
    return [h.strip() for h in self.trusted_hosts.split(",") if h.strip()]

  def is_test_db(self) -> bool:
    db_name = self.database_url.rsplit("/", 1)[-1]
    return "test" in db_name


settings = Settings()
