from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class InterceptRules(BaseModel):
    sentinel_host: str = "placeholder"
    image_path: str = "/image.png"


class DefaultsRules(BaseModel):
    width: int = Field(default=250, gt=0)
    height: int = Field(default=250, gt=0)
    text: str = "dummy"
    fgcolor: str = "202f55"
    bgcolor: str = "dddddd"


class FontRules(BaseModel):
    family: str = "DejaVu Sans"
    path: str | None = None


class LoggingRules(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class Rules(BaseModel):
    intercept: InterceptRules = Field(default_factory=InterceptRules)
    defaults: DefaultsRules = Field(default_factory=DefaultsRules)
    font: FontRules = Field(default_factory=FontRules)
    logging: LoggingRules = Field(default_factory=LoggingRules)

    model_config = ConfigDict(extra="forbid")
