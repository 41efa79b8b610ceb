"""
Gemini Proxy package.

Provides:
- A FastAPI endpoint that forwards prompts to the Gemini generateContent API
  with the API key injected server-side
- Exponential-backoff retries on rate limiting
- A small CLI client for a running proxy
"""
