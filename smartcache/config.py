from datetime import timedelta
from typing import Dict, Literal, Optional
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from smartcache.__about__ import __app_name__, __version__

load_dotenv()  # loads .env if present

ENV_PREFIX = "SMARTCACHE_"


class CacheOptions(BaseModel):
    """
    Tuning knobs for SmartCache. Invalid values fail at construction
    (pydantic.ValidationError), never on first use.
    """
    model_config = ConfigDict(frozen=True)

    max_cache_size: int = Field(10_000, gt=0)
    eviction_batch_size: int = Field(1_000, gt=0)
    default_ttl: timedelta = Field(timedelta(hours=24), ge=timedelta(0))
    low_priority_ttl: timedelta = Field(timedelta(hours=6), ge=timedelta(0))
    normal_priority_ttl: timedelta = Field(timedelta(hours=24), ge=timedelta(0))
    high_priority_ttl: timedelta = Field(timedelta(hours=72), ge=timedelta(0))
    popular_item_ttl: timedelta = Field(timedelta(days=7), ge=timedelta(0))
    popularity_threshold: int = Field(10, gt=0)

    @classmethod
    def default(cls) -> "CacheOptions":
        return cls()

    @classmethod
    def high_throughput(cls) -> "CacheOptions":
        return cls(
            max_cache_size=50_000,
            eviction_batch_size=5_000,
            low_priority_ttl=timedelta(hours=1),
            normal_priority_ttl=timedelta(hours=6),
            high_priority_ttl=timedelta(days=1),
            popular_item_ttl=timedelta(days=3),
        )

    @classmethod
    def low_memory(cls) -> "CacheOptions":
        return cls(
            max_cache_size=1_000,
            eviction_batch_size=100,
            low_priority_ttl=timedelta(minutes=30),
            normal_priority_ttl=timedelta(hours=2),
            high_priority_ttl=timedelta(hours=12),
            popular_item_ttl=timedelta(days=1),
        )

    @classmethod
    def preset(cls, name: Optional[str]) -> "CacheOptions":
        presets = {
            "default": cls.default,
            "high_throughput": cls.high_throughput,
            "low_memory": cls.low_memory,
        }
        key = (name or "default").strip().lower().replace("-", "_")
        if key not in presets:
            raise ValueError(f"unknown cache preset: {name!r} (expected one of {sorted(presets)})")
        return presets[key]()

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "CacheOptions":
        """
        Start from SMARTCACHE_PRESET, then apply any SMARTCACHE_* overrides.
        TTLs are given in seconds (SMARTCACHE_LOW_PRIORITY_TTL_SECONDS=3600).
        """
        env = os.environ if environ is None else environ
        base = cls.preset(env.get(ENV_PREFIX + "PRESET"))
        overrides: Dict[str, object] = {}
        for name in ("max_cache_size", "eviction_batch_size", "popularity_threshold"):
            raw = env.get(ENV_PREFIX + name.upper())
            if raw:
                overrides[name] = int(raw)
        for name in ("default_ttl", "low_priority_ttl", "normal_priority_ttl", "high_priority_ttl", "popular_item_ttl"):
            raw = env.get(ENV_PREFIX + name.upper() + "_SECONDS")
            if raw:
                overrides[name] = timedelta(seconds=float(raw))
        if not overrides:
            return base
        # re-validate so env overrides get the same constraints as code
        return cls(**{**base.model_dump(), **overrides})


class Settings(BaseModel):
    app_name: str = os.getenv("SMARTCACHE_APP_NAME", __app_name__)
    version: str = __version__
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(os.getenv("SMARTCACHE_LOG_LEVEL", "INFO"), validate_default=True)
    cache: CacheOptions = Field(default_factory=CacheOptions.from_env)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

settings = Settings()
