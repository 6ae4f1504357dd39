"""
Package marker for the AI proxy in `src.ai_proxy`.
Holds the Messages API client and the prompt builders used by the data-entry helpers.
"""
