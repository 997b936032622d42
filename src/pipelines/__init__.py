"""Pipeline variants, the dispatch table, and the dispatcher."""
