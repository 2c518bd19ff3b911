"""
Monitoring collaborators used at shutdown.
"""

from .cpu import Cpu
from .status import MonitoringStatus

__all__ = ["Cpu", "MonitoringStatus"]
