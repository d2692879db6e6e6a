"""Configuration model for the emlkit-export engine.

Provides ``EmlExportConfig`` with all tunable parameters and sensible
defaults.  Supports loading overrides from YAML or JSON files via the
``from_file()`` classmethod.
"""

from __future__ import annotations

import json
import pathlib

from pydantic import BaseModel, Field, model_validator


class EmlExportConfig(BaseModel):
    """All tunable parameters with sensible defaults."""

    # --- Identity ---
    exporter_version: str = "emlkit_export:1.0.0"

    # --- Encoding ---
    base64_line_length: int = Field(
        default=76,
        ge=4,
        le=76,
        description="Characters per base64 body line (MIME limit is 76).",
    )

    # --- Naming ---
    default_file_name: str = Field(
        default="message.eml",
        description="Used when a sanitized file name comes out empty.",
    )
    subject_placeholder: str = "message"
    default_attachment_name: str = "attachment"
    default_attachment_mime_type: str = "application/octet-stream"

    # --- Export Behaviour ---
    raw_passthrough: bool = Field(
        default=True,
        description="Emit the original bytes of messages that were already .eml files.",
    )
    skip_duplicates: bool = Field(
        default=False,
        description="Skip messages whose key matches an earlier one in the same batch.",
    )
    overwrite_existing: bool = False

    # --- Logging / PII Safety ---
    log_sample_data: bool = Field(
        default=False,
        description="If True, subjects and addresses may appear in logs. Default is PII-safe.",
    )

    @model_validator(mode="after")
    def _validate_fields(self) -> EmlExportConfig:
        if self.base64_line_length % 4 != 0:
            raise ValueError("base64_line_length must be a multiple of 4")
        if not self.default_file_name.strip():
            raise ValueError("default_file_name must not be empty")
        if not self.subject_placeholder.strip():
            raise ValueError("subject_placeholder must not be empty")
        if not self.default_attachment_name.strip():
            raise ValueError("default_attachment_name must not be empty")
        return self

    @classmethod
    def from_file(cls, path: str) -> EmlExportConfig:
        """Load configuration from a YAML or JSON file.

        File format is detected by extension: ``.yaml`` / ``.yml`` for YAML,
        ``.json`` for JSON.  Keys present in the file override the
        corresponding defaults; keys not present retain their defaults.
        """
        file_path = pathlib.Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        suffix = file_path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            import yaml  # type: ignore[import-untyped]

            with open(file_path) as fh:
                data = yaml.safe_load(fh)
        elif suffix == ".json":
            with open(file_path) as fh:
                data = json.load(fh)
        else:
            raise ValueError(
                f"Unsupported config file extension '{suffix}'. "
                "Use .yaml, .yml, or .json."
            )

        if data is None:
            data = {}

        return cls(**data)
