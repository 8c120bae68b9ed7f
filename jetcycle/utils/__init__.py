"""Utility modules for JetCycle."""

from jetcycle.utils.constants import CP_AIR, P_SL, R_AIR, T_SL

__all__ = ["CP_AIR", "P_SL", "R_AIR", "T_SL"]
