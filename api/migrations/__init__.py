"""
Schema bootstrap and reconciliation.

Run order at startup:
1) `bootstrap.ensure_tables`   (CREATE TABLE IF NOT EXISTS)
2) `reconciler.reconcile_schema` with `directives.DEFAULT_DIRECTIVES`
3) `reconciler.run_followups`  (best-effort column alterations)
"""
