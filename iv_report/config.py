"""Configuration for the I-V Curve Report toolkit.

Application settings, upload rules and analysis defaults.
"""

import logging
import os
from typing import Dict, Any

# ============================================================================
# APPLICATION SETTINGS
# ============================================================================
APP_CONFIG: Dict[str, Any] = {
    "app_name": "I-V Curve Report Generator",
    "version": "1.0.0",
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
}

# ============================================================================
# FILE UPLOAD SETTINGS
# ============================================================================
UPLOAD_CONFIG: Dict[str, Any] = {
    "max_file_size_mb": 100,
    "text_extensions": [".csv", ".txt"],
    "spreadsheet_extensions": [".xlsx", ".xls"],
    "encoding": os.getenv("IV_FILE_ENCODING", "utf-8-sig"),
    "delimiter": ",",
    "max_workers": int(os.getenv("IV_MAX_WORKERS", 4)),
}

# ============================================================================
# ANALYSIS SETTINGS
# ============================================================================
ANALYSIS_CONFIG: Dict[str, Any] = {
    "default_stc_temperature": 25.0,  # °C
    "default_stc_irradiance": 1000.0,  # W/m²
    "min_fields_per_row": 4,
    "interpolation_points": 1000,
}

# ============================================================================
# REPORTING SETTINGS
# ============================================================================
REPORT_CONFIG: Dict[str, Any] = {
    "title": "I-V Curve Test Report",
    "company_name": os.getenv("REPORT_COMPANY", "PV Testing Laboratory"),
    "sections": [
        "Introduction and Objectives",
        "Equipment Used",
        "Module Electrical Data",
        "Measurement Results",
        "I-V and P-V Charts",
        "Comparative Analysis",
        "Conclusions and Remarks",
        "Appendix (Raw Data)",
    ],
    "require_datasheet": os.getenv("REPORT_REQUIRE_DATASHEET", "True").lower() == "true",
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure root logging from APP_CONFIG (LOG_LEVEL env var)."""
    level_name = (level or APP_CONFIG["log_level"]).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
