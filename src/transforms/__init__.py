"""Record transforms that turn raw broker payloads into labeled records."""
