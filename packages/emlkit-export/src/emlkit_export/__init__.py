"""emlkit-export -- RFC 5322 / MIME serialization of parsed email messages.

Re-exports all public types: exporter, config, models, errors, the writer,
and the individual encoding building blocks.
"""

from emlkit_export.assembler import assemble_eml, build_eml
from emlkit_export.boundary import BoundaryGenerator
from emlkit_export.config import EmlExportConfig
from emlkit_export.encoding import (
    encode_bytes,
    encode_text,
    normalize_line_endings,
    wrap_base64,
)
from emlkit_export.errors import ErrorCode, ExportError
from emlkit_export.exporter import (
    EmlExporter,
    build_eml_download,
    create_default_exporter,
)
from emlkit_export.filename import derive_eml_file_name, sanitize_filename
from emlkit_export.headers import (
    encode_header_word,
    format_address,
    format_address_list,
    sanitize_header_value,
)
from emlkit_export.models import (
    Attachment,
    BulkExportResult,
    EmailType,
    ExportArtifact,
    ExportOutcome,
    Message,
    Recipient,
    RecipientRole,
)
from emlkit_export.writers import FilesystemArtifactWriter

__all__ = [
    # Exporter
    "EmlExporter",
    "build_eml_download",
    "create_default_exporter",
    # Assembly
    "assemble_eml",
    "build_eml",
    "BoundaryGenerator",
    # Config
    "EmlExportConfig",
    # Errors
    "ErrorCode",
    "ExportError",
    # Models
    "Message",
    "Recipient",
    "RecipientRole",
    "Attachment",
    "EmailType",
    "ExportArtifact",
    "ExportOutcome",
    "BulkExportResult",
    # Encoding
    "encode_bytes",
    "encode_text",
    "normalize_line_endings",
    "wrap_base64",
    "encode_header_word",
    "sanitize_header_value",
    "format_address",
    "format_address_list",
    "sanitize_filename",
    "derive_eml_file_name",
    # Writers
    "FilesystemArtifactWriter",
]
