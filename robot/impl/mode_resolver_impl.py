"""
Mode resolution - maps controller flags and telemetry to exactly one RobotMode.
"""
from interfaces.controller_state_interface import FlagSnapshot
from interfaces.fleet_messages import RobotMode
from interfaces.telemetry_interface import BatteryState, PoseStamped
from utils.geometry import is_pose_close


def resolve_robot_mode(flags: FlagSnapshot,
                       battery_state: BatteryState,
                       current_pose: PoseStamped,
                       previous_pose: PoseStamped,
                       translation_tolerance: float = 0.01,
                       yaw_tolerance: float = 0.01) -> RobotMode:
    """
    Resolve the reported mode. First match wins:

    request error > emergency > docking > using tool > charging > moving
    > paused > idle
    """
    if flags.request_error:
        return RobotMode.REQUEST_ERROR

    if flags.emergency:
        return RobotMode.EMERGENCY

    if flags.docking:
        return RobotMode.DOCKING

    if flags.using_tool:
        return RobotMode.USE_TOOL

    if battery_state.charging:
        return RobotMode.CHARGING

    if not is_pose_close(current_pose, previous_pose, translation_tolerance, yaw_tolerance):
        return RobotMode.MOVING

    if flags.paused:
        return RobotMode.PAUSED

    # Nothing else applies, queued goals included
    return RobotMode.IDLE
