#!/usr/bin/env python
"""
A small deployment tool built with Adder.

Try:
    python examples/deploy_demo.py deploy web --env staging --replicas 3
    python examples/deploy_demo.py __complete deploy --env ""
    python examples/deploy_demo.py completion bash
"""
import asyncio

from adder import Command, ShellCompDirective, exact_args, match_all, only_valid_args
from adder.completion import append_active_help
from adder.utils import setup_logging

setup_logging(program="deployctl")

SERVICES = ["web\tPublic web frontend", "worker\tBackground jobs", "db\tPrimary database"]


def complete_env(cmd: Command, args: list[str], to_complete: str):
    envs = ["dev\tLocal cluster", "staging\tPre-production", "prod\tProduction"]
    if not args:
        envs = append_active_help(envs, "Pick the service first for a tailored list")
    return envs, ShellCompDirective.NO_FILE_COMP


async def deploy(cmd: Command, args: list[str]) -> None:
    flags = cmd.flags()
    await asyncio.sleep(0.1)
    cmd.print_out(
        f"Deploying {args[0]} to {flags.get('env')} "
        f"with {flags.get('replicas')} replica(s) from {flags.get('manifest') or 'defaults'}"
    )


def status(cmd: Command, args: list[str]) -> None:
    verbose = cmd.flags().get("verbose")
    cmd.print_out("All services healthy" + (" (3 checks)" if verbose else ""))


root = Command(use="deployctl", short="Deploy services to clusters", version="0.1.0")
root.persistent_flags().add_bool("verbose", "v", usage="Verbose output")

deploy_cmd = Command(
    use="deploy SERVICE",
    short="Deploy a service",
    example="  deployctl deploy web --env prod",
    valid_args=SERVICES,
    args=match_all(exact_args(1), only_valid_args),
    run=deploy,
)
deploy_cmd.flags().add_string("env", "e", default="dev", usage="Target environment")
deploy_cmd.flags().add_int("replicas", "r", default=1, usage="Number of replicas")
deploy_cmd.flags().add_string("manifest", "m", usage="Deployment manifest")
deploy_cmd.flags().add_bool("dry-run", usage="Only print what would change")
deploy_cmd.flags().add_bool("force", usage="Skip safety checks")
deploy_cmd.mark_flag_filename("manifest", "yaml", "yml")
deploy_cmd.mark_flags_mutually_exclusive("dry-run", "force")
deploy_cmd.register_flag_completion_func("env", complete_env)

root.add_command(deploy_cmd, Command(use="status", short="Show service health", run=status))

if __name__ == "__main__":
    root.execute()
