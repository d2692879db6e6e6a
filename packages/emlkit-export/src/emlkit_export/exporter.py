"""EmlExporter -- orchestrator and public API for the emlkit-export engine.

Turns a parsed message into a downloadable ``.eml`` artifact, either by
passing the original bytes through (when the message was loaded from an
``.eml`` file) or by serializing it with :mod:`emlkit_export.assembler`.
Bulk export hands artifacts to an :class:`ArtifactWriter` one at a time.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from emlkit_core.protocols import ArtifactWriter

from emlkit_export.assembler import assemble_eml
from emlkit_export.boundary import BoundaryGenerator
from emlkit_export.config import EmlExportConfig
from emlkit_export.encoding import encode_bytes, encode_text
from emlkit_export.errors import ErrorCode, ExportError
from emlkit_export.filename import derive_eml_file_name
from emlkit_export.models import (
    BulkExportResult,
    EmailType,
    ExportArtifact,
    ExportOutcome,
    Message,
)
from emlkit_export.writers import FilesystemArtifactWriter

logger = logging.getLogger("emlkit_export")

MEDIA_TYPE = "message/rfc822"

MessageInput = Message | Mapping[str, Any]


class EmlExporter:
    """Top-level orchestrator for the emlkit-export engine.

    Parameters
    ----------
    config:
        Export configuration. Uses defaults when *None*.
    boundaries:
        Boundary source shared by every export.  Inject a deterministic
        generator in tests; a fresh default one is used when *None*.
    """

    def __init__(
        self,
        config: EmlExportConfig | None = None,
        boundaries: BoundaryGenerator | None = None,
    ) -> None:
        self._config = config or EmlExportConfig()
        self._boundaries = boundaries or BoundaryGenerator()

    @property
    def config(self) -> EmlExportConfig:
        return self._config

    def can_passthrough(self, message: Message) -> bool:
        """Return True if *message* can be emitted as its original bytes."""
        return (
            self._config.raw_passthrough
            and message.source_format == EmailType.EML
            and bool(message.raw_bytes)
        )

    def export(self, message: MessageInput | None) -> ExportArtifact | None:
        """Build the downloadable artifact for a single message.

        Returns
        -------
        ExportArtifact | None
            None only when *message* is None.

        Raises
        ------
        pydantic.ValidationError
            If *message* is neither a :class:`Message` nor a mapping.
        """
        if message is None:
            return None
        artifact, _, _ = self._build(Message.model_validate(message))
        return artifact

    def export_many(
        self,
        messages: Iterable[MessageInput | None],
        writer: ArtifactWriter,
    ) -> BulkExportResult:
        """Export *messages* sequentially through *writer*.

        A failure on one message is recorded in its outcome and does not
        stop the batch.  Absent messages are skipped.

        Returns
        -------
        BulkExportResult
            Per-message outcomes and counts.
        """
        overall_start = time.monotonic()
        config = self._config
        result = BulkExportResult(exporter_version=config.exporter_version)
        seen_keys: set[str] = set()

        for position, item in enumerate(messages):
            if item is None:
                result.skipped_count += 1
                continue

            # ==========================================================
            # Step 1: Validate
            # ==========================================================
            try:
                message = Message.model_validate(item)
            except ValidationError as exc:
                err = ExportError(
                    code=ErrorCode.E_INPUT_INVALID,
                    message=f"Item {position} is not a message: {exc.error_count()} error(s)",
                    stage="validate",
                )
                logger.error(
                    "emlkit_export | item=%d | code=%s | detail=%s",
                    position,
                    err.code.value,
                    err.message,
                )
                result.outcomes.append(
                    ExportOutcome(
                        message_key="",
                        errors=[err.code.value],
                        error_details=[err],
                    )
                )
                result.failed_count += 1
                continue

            # ==========================================================
            # Step 2: Duplicate Check
            # ==========================================================
            key = message.message_key.key
            if config.skip_duplicates and key in seen_keys:
                warn = ExportError(
                    code=ErrorCode.W_DUPLICATE_SKIPPED,
                    message=f"Item {position} duplicates an earlier message",
                    stage="dedupe",
                    recoverable=True,
                )
                result.outcomes.append(
                    ExportOutcome(
                        message_key=key,
                        warnings=[warn.code.value],
                        error_details=[warn],
                    )
                )
                result.skipped_count += 1
                continue
            seen_keys.add(key)

            # ==========================================================
            # Step 3: Build Artifact
            # ==========================================================
            artifact, warnings, passthrough = self._build(message)

            # ==========================================================
            # Step 4: Deliver
            # ==========================================================
            try:
                location = writer.write(
                    artifact.file_name, artifact.content, artifact.media_type
                )
            except Exception as exc:
                err = ExportError(
                    code=ErrorCode.E_WRITE_FAILED,
                    message=f"Failed to write artifact: {exc}",
                    stage="write",
                )
                logger.error(
                    "emlkit_export | key=%s | code=%s | detail=%s",
                    key[:8],
                    err.code.value,
                    str(exc),
                )
                result.outcomes.append(
                    ExportOutcome(
                        message_key=key,
                        file_name=artifact.file_name,
                        passthrough=passthrough,
                        errors=[err.code.value],
                        warnings=[w.code.value for w in warnings],
                        error_details=[err] + warnings,
                    )
                )
                result.failed_count += 1
                continue

            result.outcomes.append(
                ExportOutcome(
                    message_key=key,
                    file_name=artifact.file_name,
                    location=location,
                    passthrough=passthrough,
                    warnings=[w.code.value for w in warnings],
                    error_details=warnings,
                )
            )
            result.locations.append(location)
            result.exported_count += 1

        result.processing_time_seconds = time.monotonic() - overall_start

        logger.info(
            "emlkit_export | exported=%d | failed=%d | skipped=%d | time=%.1fs",
            result.exported_count,
            result.failed_count,
            result.skipped_count,
            result.processing_time_seconds,
        )

        return result

    def export_to_directory(
        self,
        messages: Iterable[MessageInput | None],
        directory: str,
    ) -> BulkExportResult:
        """Export *messages* as files under *directory*."""
        writer = FilesystemArtifactWriter(
            directory, overwrite=self._config.overwrite_existing
        )
        return self.export_many(messages, writer)

    def _build(
        self, message: Message
    ) -> tuple[ExportArtifact, list[ExportError], bool]:
        config = self._config
        file_name = derive_eml_file_name(
            message,
            default_file_name=config.default_file_name,
            subject_placeholder=config.subject_placeholder,
        )

        if self.can_passthrough(message):
            payload = encode_bytes(message.raw_bytes or b"")
            warnings: list[ExportError] = []
            passthrough = True
        else:
            assembled = assemble_eml(message, config, self._boundaries)
            payload = encode_text(assembled.text)
            warnings = assembled.warnings
            passthrough = False

        if config.log_sample_data:
            logger.debug(
                "emlkit_export | file=%s | subject=%s | passthrough=%s | warnings=%d",
                file_name,
                message.subject,
                passthrough,
                len(warnings),
            )
        else:
            logger.debug(
                "emlkit_export | key=%s | passthrough=%s | warnings=%d",
                message.message_key.key[:8],
                passthrough,
                len(warnings),
            )

        artifact = ExportArtifact(
            file_name=file_name,
            media_type=MEDIA_TYPE,
            payload_base64=payload,
        )
        return artifact, warnings, passthrough


def build_eml_download(
    message: MessageInput | None,
    config: EmlExportConfig | None = None,
) -> ExportArtifact | None:
    """Build the ``.eml`` download for *message*, or None if it is absent."""
    return EmlExporter(config=config).export(message)


def create_default_exporter(**overrides) -> EmlExporter:
    """Create an EmlExporter, building its config from keyword overrides.

    ``config`` and ``boundaries`` are passed straight to the exporter; any
    other keyword is treated as an :class:`EmlExportConfig` field.

    Returns
    -------
    EmlExporter
        A fully-configured exporter ready for ``export()`` calls.
    """
    exporter_keys = {"config", "boundaries"}
    exporter_kwargs = {k: v for k, v in overrides.items() if k in exporter_keys}
    config_kwargs = {k: v for k, v in overrides.items() if k not in exporter_keys}

    config = exporter_kwargs.pop("config", None)
    if config is None and config_kwargs:
        config = EmlExportConfig(**config_kwargs)
    elif config is None:
        config = EmlExportConfig()

    return EmlExporter(config=config, boundaries=exporter_kwargs.pop("boundaries", None))
