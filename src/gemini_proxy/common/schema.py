"""Pydantic models for the proxy's response bodies."""
from __future__ import annotations
from pydantic import BaseModel


class GenerateOut(BaseModel):
    text: str


class ErrorOut(BaseModel):
    error: str | None = None
