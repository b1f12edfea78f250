"""Configuration schema for the command-line front end using Pydantic.

The parsing engine itself takes no settings; these options only control
how the CLI reads manifest files and renders results.
"""

import codecs

from pydantic import BaseModel, field_validator


class CliConfig(BaseModel):
    """Settings for the manifest-parser command line.

    Attributes:
        encoding: Text encoding used to read manifest files.
        color: Whether console output may use colors.
        sort_output: Sort section and key listings for stable output.
    """

    encoding: str = "utf-8"
    color: bool = True
    sort_output: bool = True

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Ensure the encoding is known to the codec registry."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v
