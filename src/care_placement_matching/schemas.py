"""Schema definitions for match report outputs.

These define the expected columns of each report file, enabling validation
and clear documentation of data contracts.
"""

from __future__ import annotations

# One row per home, in rank order
MATCH_OUTPUT_COLUMNS = (
    "referral_id",
    "rank",
    "home_id",
    "home_name",
    "location",
    "free_beds",
    "score",  # 0-100; 0 for every ineligible home
    "eligible",
    "existing_thread_id",  # empty when the home has not been contacted
    "fail_count",
    "warn_count",
)

# One row per reason, in generation order within each home
MATCH_EXPLAIN_COLUMNS = (
    "referral_id",
    "home_id",
    "home_name",
    "position",
    "level",  # pass | warn | fail
    "code",  # reason code, need-qualified for need reasons
    "text",
)


def validate_columns(df_columns: list[str], required: frozenset[str], report_name: str) -> None:
    """Validate that DataFrame has required columns.

    Args:
        df_columns: List of column names from DataFrame.
        required: Set of required column names.
        report_name: Name of report for error messages.

    Raises:
        ValueError: If required columns are missing.
    """
    missing = required - set(df_columns)
    if missing:
        raise ValueError(f"{report_name}: Missing required columns: {sorted(missing)}")
