"""Configuration for procureflow, read from the environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from procureflow.domain.entities import DocumentType
from procureflow.domain.finalization import DEFAULT_PROCESS_TITLES

DEFAULT_DB_PATH = Path.home() / ".procureflow" / "procureflow.db"


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Environment variables:
        PROCUREFLOW_DB_PATH: SQLite database file; defaults to DEFAULT_DB_PATH
        PROCUREFLOW_LOG_LEVEL: Log level name; unset leaves logging unconfigured
        PROCUREFLOW_RFQ_PROCESS: Approval process title for RFQs
        PROCUREFLOW_INVOICE_PROCESS: Approval process title for invoices
    """

    db_path: Optional[str] = None
    log_level: Optional[str] = None
    process_titles: dict[DocumentType, str] = field(
        default_factory=lambda: dict(DEFAULT_PROCESS_TITLES)
    )

    @property
    def database_path(self) -> Path:
        """The configured database file, or DEFAULT_DB_PATH."""
        return Path(self.db_path).expanduser() if self.db_path else DEFAULT_DB_PATH

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_path=os.getenv("PROCUREFLOW_DB_PATH"),
            log_level=os.getenv("PROCUREFLOW_LOG_LEVEL"),
            process_titles={
                DocumentType.RFQ: os.getenv(
                    "PROCUREFLOW_RFQ_PROCESS", DEFAULT_PROCESS_TITLES[DocumentType.RFQ]
                ),
                DocumentType.INVOICE: os.getenv(
                    "PROCUREFLOW_INVOICE_PROCESS", DEFAULT_PROCESS_TITLES[DocumentType.INVOICE]
                ),
            },
        )
