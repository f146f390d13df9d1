from typing import Optional

from pydantic import PrivateAttr
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "CaseBridge API"
    debug: bool = False

    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    convert_query_params: bool = True
    convert_body_params: bool = True
    json_indent: Optional[int] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    _cors_origin_list: list[str] = PrivateAttr(default_factory=list)

    def model_post_init(self, __context: object) -> None:
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        self._cors_origin_list = origins

    @property
    def cors_origin_list(self) -> list[str]:
        return self._cors_origin_list


settings = Settings()
