"""Middleware applicativi (autenticazione delle richieste API)."""
