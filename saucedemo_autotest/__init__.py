"""
================================================================================
SauceDemo UI Automation
================================================================================

Resilient Playwright harness for the SauceDemo store.

Packages:
    - common: configuration and console logging setup
    - ui_testing: interaction framework, page objects, fixture data, e2e suites
    - unit: browser-free tests for the framework

Author: Automation Team
License: MIT
================================================================================
"""

__version__ = "1.0.0"
