"""
Invoice QA Test Suite

Test categories:
- test_env_config.py - Configuration snapshot and require_env
- test_invoice_api.py - API client lifecycle and payload builder
- test_page_objects.py - Locator chains, probes, dialogs, date helpers
- api/ - Live CRUD tests against the invoicing API
- e2e/ - Live browser tests against the invoicing web app
"""
