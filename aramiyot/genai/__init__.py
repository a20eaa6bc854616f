"""
Generative AI integration module for Aramiyot

This module provides:
- Jinja2 prompt definitions with typed input/output contracts
- Google Generative Language API client (single-shot and streaming)
- A deterministic stub backend for development and tests
"""

from .client import GenerativeClient, GoogleGenerativeClient
from .prompts import PromptDefinition, RenderedPrompt, MediaPart, response_schema
from .stub import StubGenerativeClient

__all__ = [
    'GenerativeClient',
    'GoogleGenerativeClient',
    'PromptDefinition',
    'RenderedPrompt',
    'MediaPart',
    'response_schema',
    'StubGenerativeClient'
]
