"""
Home repair chat assistant.

Persists conversations per user and answers with a single chat completion
built from a fixed system prompt and the recent conversation window.
"""
