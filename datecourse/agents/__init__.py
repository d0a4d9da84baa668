"""
Agents package.

Each agent wraps one grounded Gemini workflow (prompts, types and the
model-facing helpers). Service-level orchestration lives in datecourse.services.
"""
