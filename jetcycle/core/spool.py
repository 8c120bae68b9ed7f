"""Spool speed dynamics.

The spool is modelled as a rate-limited first-order lag: each tick the
RPM moves toward its governor target by at most ``rate · dt``.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# Below this the engine is windmilling/stopped and the cycle is not solved.
RUN_THRESHOLD_RPM = 5.0


def advance_spool(current_rpm: float, target_rpm: float, ramp_rate: float, dt: float) -> float:
    """Move *current_rpm* toward *target_rpm* without overshooting.

    Args:
        current_rpm: Spool speed [%].
        target_rpm: Governor target [%].
        ramp_rate: Maximum rate of change [%/s].
        dt: Timestep [s].

    Returns:
        New spool speed [%].
    """
    if dt <= 0.0 or ramp_rate <= 0.0:
        return current_rpm

    step = ramp_rate * dt
    if target_rpm > current_rpm:
        return min(current_rpm + step, target_rpm)
    return max(current_rpm - step, target_rpm)


def governor_target(throttle: float, ignition: bool, idle_rpm: float) -> float:
    """Spool speed the fuel control commands for a throttle setting.

    With ignition on, throttle 0–100 % spans idle to 100 % N1. With
    ignition off the spool is driven straight from the throttle.
    """
    if ignition:
        target = idle_rpm + (throttle / 100.0) * (100.0 - idle_rpm)
    else:
        target = throttle
    return min(max(target, 0.0), 100.0)


def clamp_timestep(dt: float, max_timestep: float) -> float:
    """Clamp a wall-clock delta to ``[0, max_timestep]``."""
    if dt > max_timestep:
        logger.debug("Clamping timestep %.4f s to %.4f s", dt, max_timestep)
        return max_timestep
    return max(dt, 0.0)


def settle_time(current_rpm: float, target_rpm: float, ramp_rate: float) -> float:
    """Time [s] the spool needs to reach *target_rpm* from *current_rpm*."""
    if ramp_rate <= 0.0:
        return float("inf") if target_rpm != current_rpm else 0.0
    return abs(target_rpm - current_rpm) / ramp_rate
