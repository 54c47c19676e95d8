"""
ProFast Backend - API Schemas
==============================

Pydantic models for request bodies and responses, plus helpers that turn
stored MongoDB documents into JSON-safe dicts.

Request models are deliberately permissive: they name the fields a handler
reads and let every other field through unchanged (extra="allow"), because
documents are stored as the client sent them.
"""
