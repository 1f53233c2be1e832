"""
UI Testing

Playwright-based UI automation for the SauceDemo store.
"""
