#!/usr/bin/env python3
"""
Fleet Client Simulation Demo

Runs one ClientNode against in-process collaborators:
- SimulatedRobot as navigation actuator, pose provider and battery provider
- InMemoryFleetClient as request channel and state sink
- CallableServiceCaller for the docking, undocking and tool services

The scripted coordinator sends a destination, a multi-waypoint path, a
docking command, a path that starts with undocking, and a tool command,
printing the reported mode as the robot works through them.

Run with: python demo_fleet_client_simulation.py [--config client.yaml]
"""
import argparse
import logging
import sys
import time

from config.configuration_provider import ConfigurationProvider
from interfaces.fleet_messages import (
    RobotMode, Location, ModeParameter, ModeRequest, PathRequest, DestinationRequest
)
from robot.client_node import ClientNode, ClientNodeStartupError
from simulation.callable_service_caller import CallableServiceCaller
from simulation.in_memory_fleet_client import InMemoryFleetClient
from simulation.simulated_robot import SimulatedRobot
from utils.logging_setup import configure_logging


logger = logging.getLogger("FleetClientDemo")


def _location(x: float, y: float, yaw: float, delay: float, level_name: str) -> Location:
    """Waypoint scheduled `delay` seconds from now."""
    arrival = time.time() + delay
    sec = int(arrival)
    return Location(sec=sec, nanosec=int((arrival - sec) * 1e9), x=x, y=y, yaw=yaw,
                    level_name=level_name)


def _wait_for_mode(fleet_client: InMemoryFleetClient, mode: RobotMode, timeout: float) -> bool:
    # Give the node a publish cycle to pick up the new command
    time.sleep(1.0)
    deadline = time.time() + timeout
    while time.time() < deadline:
        state = fleet_client.get_latest_state()
        if state is not None and state.mode == mode and not state.path:
            return True
        time.sleep(0.1)
    return False


def _report(fleet_client: InMemoryFleetClient) -> None:
    state = fleet_client.get_latest_state()
    if state is None:
        return
    print(f"[Demo] task={state.task_id!r} mode={state.mode.value} "
          f"battery={state.battery_percent:.1f}% "
          f"pose=({state.location.x:.2f}, {state.location.y:.2f}) "
          f"remaining waypoints={len(state.path)}")


def run_demo(provider: ConfigurationProvider) -> int:
    config = provider.get_client_node_config()
    robot_config = config.robot

    robot = SimulatedRobot(robot_id=robot_config.robot_name, speed=1.5)
    fleet_client = InMemoryFleetClient()
    docking = CallableServiceCaller("docking", delay=0.5)
    undocking = CallableServiceCaller("undocking", delay=0.5)
    tool = CallableServiceCaller("tool", delay=1.0)

    try:
        node = ClientNode.make(config, fleet_client, robot, robot,
                               docking_caller=docking,
                               undocking_caller=undocking,
                               tool_caller=tool)
    except ClientNodeStartupError as e:
        logger.error(f"Startup failed: {e}")
        return 1

    node.print_config()
    robot.subscribe_battery(node.battery_state_callback)

    def mode_request(task_id, mode, parameters=None):
        return ModeRequest(robot_config.fleet_name, robot_config.robot_name, task_id, mode,
                           parameters or [])

    level = robot_config.level_name
    robot.start()
    try:
        with node:
            print("\n[Demo] 1. Destination command")
            fleet_client.post_destination_request(DestinationRequest(
                robot_config.fleet_name, robot_config.robot_name, "task-1",
                _location(2.0, 0.0, 0.0, 1.0, level)))
            _wait_for_mode(fleet_client, RobotMode.IDLE, 15.0)
            _report(fleet_client)

            print("\n[Demo] 2. Path command with three waypoints")
            fleet_client.post_path_request(PathRequest(
                robot_config.fleet_name, robot_config.robot_name, "task-2", [
                    _location(2.0, 0.0, 0.0, 0.0, level),
                    _location(2.0, 2.0, 1.57, 2.0, level),
                    _location(4.0, 2.0, 0.0, 4.0, level),
                ]))
            _wait_for_mode(fleet_client, RobotMode.IDLE, 20.0)
            _report(fleet_client)

            print("\n[Demo] 3. Docking command at 'charger_1'")
            fleet_client.post_mode_request(mode_request(
                "task-3", RobotMode.DOCKING, [ModeParameter("docking", "charger_1")]))
            time.sleep(1.5)
            robot.set_charging(True)
            time.sleep(1.5)
            _report(fleet_client)

            print("\n[Demo] 4. Path command while docked (undocks first)")
            robot.set_charging(False)
            fleet_client.post_path_request(PathRequest(
                robot_config.fleet_name, robot_config.robot_name, "task-4", [
                    _location(4.0, 2.0, 0.0, 0.0, level),
                    _location(1.0, 1.0, 3.14, 3.0, level),
                ]))
            _wait_for_mode(fleet_client, RobotMode.IDLE, 20.0)
            _report(fleet_client)
            print(f"[Demo] undocking payloads: {undocking.payloads}")

            print("\n[Demo] 5. Tool command")
            fleet_client.post_mode_request(mode_request(
                "task-5", RobotMode.USE_TOOL, [ModeParameter("tool_cmd", "lift")]))
            time.sleep(2.0)
            _report(fleet_client)
            print(f"[Demo] tool payloads: {tool.payloads}")
    finally:
        robot.stop()

    modes = [state.mode.value for state in fleet_client.get_states()]
    seen = list(dict.fromkeys(modes))
    print(f"\n[Demo] Modes reported: {', '.join(seen)}")
    return 0


def main():
    """Main entry point for the fleet client simulation demo."""
    parser = argparse.ArgumentParser(description="Fleet client simulation demo")
    parser.add_argument("--config", default=None, help="YAML or JSON configuration file")
    parser.add_argument("--log-level", default=None, help="Override system.log_level")
    args = parser.parse_args()

    provider = ConfigurationProvider(config_file=args.config)
    # Publish faster than the default so the scripted steps show up in the report
    provider.set_value("client.publish_frequency", 5.0)
    if args.log_level:
        provider.set_value("system.log_level", args.log_level.upper())

    if provider.errors:
        for error in provider.errors:
            print(f"Configuration error: {error}")
        sys.exit(1)

    configure_logging(provider.get_system_config())
    sys.exit(run_demo(provider))


if __name__ == "__main__":
    main()
