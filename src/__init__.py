"""
Ministry fair signup backend.
Subpackages: `workbook` (spreadsheet row store), `ministries` (ministry-list reading),
`ai_proxy` (Messages API client and prompts), `api` (FastAPI app), and `common` (settings, logging, helpers).
"""
