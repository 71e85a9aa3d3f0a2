"""Suggest homes: rank every home for one referral and report the outcome.

Usage example:
    >>> from care_placement_matching.application.suggest_homes import run_match_report
    >>> from care_placement_matching.config import MatchingConfig
    >>> config = MatchingConfig.from_env()
    >>> fs = ...  # Injected FileSystem from the CLI/composition root
    >>> run_match_report("r1", config=config, fs=fs)
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..config import MatchingConfig
from ..domain.matching import HomeMatch, MatchingWeights, compute_matches
from ..exceptions import DependencyMissingError, MatchingConfigMissingError, ReferralNotFoundError
from ..observability import get_logger
from ..presentation import explain_rows, match_rows
from ..protocols import FileSystem, HomeProvider, ReferralProvider, ThreadIndexProvider
from ..schemas import MATCH_EXPLAIN_COLUMNS, MATCH_OUTPUT_COLUMNS, validate_columns
from .matching_profiles import resolve_matching_weights
from .placement_snapshot import load_placement_snapshot


def suggest_homes(
    referral_id: str,
    *,
    referrals: ReferralProvider,
    homes: HomeProvider,
    threads: ThreadIndexProvider,
    weights: MatchingWeights | None = None,
) -> list[HomeMatch]:
    """Rank every known home for a referral.

    Args:
        referral_id: Referral to match.
        referrals: Referral provider.
        homes: Home provider (the full candidate pool; nothing is pre-filtered).
        threads: Thread index provider, used to flag homes already contacted.
        weights: Optional soft-score weights.

    Returns:
        One match per home, eligible homes first by score.

    Raises:
        ReferralNotFoundError: If the referral provider does not know the id.
    """
    logger = get_logger("care_placement_matching.suggest_homes")
    referral = referrals.get_referral(referral_id)
    if referral is None:
        raise ReferralNotFoundError(referral_id)

    candidates = homes.list_homes()
    thread_index = threads.thread_index(referral_id)
    matches = compute_matches(referral.snapshot(), candidates, thread_index, weights)

    eligible = sum(1 for match in matches if match.eligible)
    contacted = sum(1 for match in matches if match.already_contacted)
    logger.info(
        "Referral %s: %s homes evaluated, %s eligible, %s already contacted",
        referral_id,
        len(matches),
        eligible,
        contacted,
    )
    if referral.snapshot().dol_applies:
        logger.info("Referral %s: Deprivation of Liberty checks applied", referral_id)
    return matches


def run_match_report(
    referral_id: str,
    *,
    snapshot_path: str | Path | None = None,
    out_dir: str | Path | None = None,
    config: MatchingConfig | None = None,
    fs: FileSystem | None = None,
) -> dict[str, Path]:
    """Match one referral from a snapshot and write match and explain reports.

    Args:
        referral_id: Referral to match.
        snapshot_path: Placement snapshot JSON (default: ``config.snapshot_path``).
        out_dir: Directory for output files (default: ``config.output_dir``).
        config: Matching configuration (required; load at entry point).
        fs: Filesystem (required; inject at entry point).

    Returns:
        Dict with paths to the matches and explain files.
    """
    if config is None:
        raise MatchingConfigMissingError()
    if fs is None:
        raise DependencyMissingError("FileSystem", reason="Inject it at the entry point.")

    logger = get_logger("care_placement_matching.match_report")
    snapshot = load_placement_snapshot(
        path=Path(snapshot_path or config.snapshot_path),
        fs=fs,
    )
    weights = resolve_matching_weights(config.matching_profile_path, fs)
    matches = suggest_homes(
        referral_id,
        referrals=snapshot,
        homes=snapshot,
        threads=snapshot,
        weights=weights,
    )

    out_dir = Path(out_dir or config.output_dir)
    fs.mkdir(out_dir, parents=True)

    listed = matches if config.include_ineligible else [m for m in matches if m.eligible]
    matches_df = pd.DataFrame(match_rows(referral_id, listed), columns=list(MATCH_OUTPUT_COLUMNS))
    explain_df = pd.DataFrame(
        explain_rows(referral_id, matches), columns=list(MATCH_EXPLAIN_COLUMNS)
    )
    validate_columns(list(matches_df.columns), frozenset(MATCH_OUTPUT_COLUMNS), "Match output")
    validate_columns(list(explain_df.columns), frozenset(MATCH_EXPLAIN_COLUMNS), "Match explain")

    matches_path = out_dir / f"matches_{referral_id}.csv"
    explain_path = out_dir / f"matches_{referral_id}_explain.csv"
    fs.write_csv(matches_df, matches_path)
    fs.write_csv(explain_df, explain_path)
    logger.info("Matches: %s (%s rows)", matches_path, len(matches_df))
    logger.info("Explain: %s (%s rows)", explain_path, len(explain_df))

    return {"matches": matches_path, "explain": explain_path}
