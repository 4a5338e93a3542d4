"""NAPALM driver and typed client for HRUI web-managed switches."""

from napalm_hrui.driver import HRUIDriver

__all__ = ["HRUIDriver"]
