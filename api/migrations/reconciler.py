"""
Schema reconciler.

Brings one column per directive into its current shape:

    legacy  current  action
    ------  -------  ------------------------------------------
    yes     no       rename legacy -> current (keeps the data)
    no      no       add current column
    yes     yes      leave both alone (never merge or drop)
    -       yes      nothing to do

A directive whose legacy and current names match is never renamed.

The directive's definition is only used when the column is added.
PostgreSQL cannot rename and retype a column in one statement, so a renamed
column keeps its legacy type and default (a renamed `isVerified` does not
gain `DEFAULT 0`). Issuing a second ALTER would break the one-statement rule
below.

Every call issues at most one ALTER statement. If that statement fails
(typically another instance won the race) the directive is abandoned for
this run; the next run sees the new state and does nothing. That is what
makes it safe to run on every start, from several instances at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Literal

from core.db import Database, StoreUnavailableError, quote_ident
from core.outcome import Outcome, combine

from .directives import FOLLOWUP_STATEMENTS, Directive

logger = logging.getLogger(__name__)

ReconcileAction = Literal["renamed", "created", "skipped_both_present", "noop", "failed"]

_EXISTING_COLUMNS_SQL = """
    SELECT column_name
    FROM information_schema.columns
    WHERE table_schema = current_schema()
      AND table_name = $1
      AND column_name = ANY($2::text[])
"""


@dataclass(frozen=True)
class ReconcileReport:
    directive: Directive
    action: ReconcileAction
    outcome: Outcome


async def existing_columns(db: Database, table: str, columns: Iterable[str]) -> set[str]:
    rows = await db.fetch_all(_EXISTING_COLUMNS_SQL, table, list(columns))
    return {str(row["column_name"]) for row in rows}


def rename_column_sql(table: str, old: str, new: str) -> str:
    return f"ALTER TABLE {quote_ident(table)} RENAME COLUMN {quote_ident(old)} TO {quote_ident(new)}"


def add_column_sql(table: str, column: str, definition: str) -> str:
    return f"ALTER TABLE {quote_ident(table)} ADD COLUMN {quote_ident(column)} {definition}"


def plan(directive: Directive, *, legacy_exists: bool, current_exists: bool) -> ReconcileAction:
    """
    Decide what to do for a directive given the live column state.
    """
    if directive.is_rename and legacy_exists and not current_exists:
        return "renamed"
    if not legacy_exists and not current_exists:
        return "created"
    if directive.is_rename and legacy_exists and current_exists:
        return "skipped_both_present"
    return "noop"


async def reconcile(db: Database, directive: Directive) -> ReconcileReport:
    table = directive.table
    legacy = directive.legacy_column
    current = directive.current_column

    try:
        present = await existing_columns(db, table, {legacy, current})
    except StoreUnavailableError:
        raise
    except Exception as exc:
        logger.warning("reconcile_inspect_failed directive=%s error=%s", directive.describe(), exc)
        return ReconcileReport(directive, "failed", Outcome.degraded(f"{directive.describe()}: {exc}"))

    action = plan(directive, legacy_exists=legacy in present, current_exists=current in present)

    if action == "skipped_both_present":
        logger.info(
            "reconcile_skipped_both_present table=%s legacy=%s current=%s",
            table,
            legacy,
            current,
        )
        return ReconcileReport(directive, action, Outcome.success())

    if action == "noop":
        return ReconcileReport(directive, action, Outcome.success())

    if action == "renamed":
        sql = rename_column_sql(table, legacy, current)
    else:
        sql = add_column_sql(table, current, directive.definition)

    try:
        await db.execute(sql)
    except StoreUnavailableError:
        raise
    except Exception as exc:
        # Most likely a concurrent instance already altered the column.
        logger.warning("reconcile_alter_failed directive=%s action=%s error=%s", directive.describe(), action, exc)
        return ReconcileReport(directive, "failed", Outcome.degraded(f"{directive.describe()}: {exc}"))

    logger.info("reconcile_%s table=%s legacy=%s current=%s", action, table, legacy, current)
    return ReconcileReport(directive, action, Outcome.success())


async def reconcile_schema(db: Database, directives: Iterable[Directive]) -> list[ReconcileReport]:
    """
    Apply directives in order. A failed directive never stops the others.
    """
    reports = [await reconcile(db, directive) for directive in directives]

    counts: dict[str, int] = {}
    for report in reports:
        counts[report.action] = counts.get(report.action, 0) + 1
    summary = " ".join(f"{action}={count}" for action, count in sorted(counts.items()))
    outcome = combine([r.outcome for r in reports])
    logger.info("reconcile_done directives=%s %s status=%s", len(reports), summary, outcome.status)
    return reports


async def run_followups(db: Database, statements: Iterable[str] = FOLLOWUP_STATEMENTS) -> list[Outcome]:
    outcomes: list[Outcome] = []
    for sql in statements:
        try:
            await db.execute(sql)
        except StoreUnavailableError:
            raise
        except Exception as exc:
            logger.warning("followup_skipped sql=%r error=%s", sql, exc)
            outcomes.append(Outcome.degraded(str(exc)))
            continue
        outcomes.append(Outcome.success())
    return outcomes
