"""Configuration for the V8 host."""

from pydantic import BaseModel, Field


class V8Config(BaseModel):
    """Configuration for the V8 host."""

    timeout: float = Field(default=10.0, gt=0, description="Seconds per evaluation")
    max_memory: int | None = Field(default=None, gt=0, description="Heap limit (bytes)")
    # Evaluated in every new realm, e.g. to model a non-conformant host
    setup_script: str = ""
