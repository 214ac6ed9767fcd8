import pytest
from prompt_toolkit.completion import FuzzyWordCompleter, PathCompleter

from adder import Command, ShellCompDirective, exact_args
from adder.interactive import (
    interactive_flags,
    run_interactive,
    selectable_commands,
    value_completer,
)


def noop(cmd, args):
    return None


@pytest.fixture
def root():
    root = Command(use="app", short="Demo app")
    root.persistent_flags().add_bool("debug", "d", usage="Enable debug output")
    remote = Command(use="remote", short="Manage remotes")
    add = Command(use="add NAME URL", short="Add a remote", args=exact_args(2), run=noop)
    add.flags().add_string("branch", "b", usage="Branch to track")
    add.flags().add_int("depth", usage="Fetch depth")
    add.flags().add_string_slice("tag", usage="Tags")
    add.flags().add("legacy", type="bool", deprecated="no longer used")
    add.register_flag_completion_func(
        "branch",
        lambda cmd, args, to_complete: (["main", "develop"], ShellCompDirective.NO_FILE_COMP),
    )
    remote.add_command(add)
    root.add_command(remote, Command(use="status", short="Show status", run=noop))
    return root


def scripted(answers):
    """Build an `ask` callback replaying `answers` and recording the prompts."""
    prompts = []
    remaining = list(answers)

    async def ask(message, completer):
        prompts.append((message, completer))
        return remaining.pop(0)

    return ask, prompts


def picker(*names):
    remaining = list(names)

    async def select(cmd, choices):
        name = remaining.pop(0)
        if name is None:
            return None
        return next(choice for choice in choices if choice.name == name)

    return select


def test_selectable_commands_skip_completion_and_help(root):
    root.init_default_help_cmd()
    root.init_default_completion_cmd([])
    assert [cmd.name for cmd in selectable_commands(root)] == ["remote", "status"]


def test_interactive_flags_order_and_filtering(root):
    add = root.find_next("remote").find_next("add")
    add.init_default_help_flag()
    names = [flag.name for flag in interactive_flags(add)]
    assert names == ["branch", "depth", "tag", "debug"]


def test_value_completer_uses_flag_callback(root):
    add = root.find_next("remote").find_next("add")
    completer = value_completer(root, ["remote", "add"], add.flag("branch"))
    assert isinstance(completer, FuzzyWordCompleter)
    assert completer.words == ["main", "develop"]
    assert value_completer(root, ["remote", "add"], add.flag("depth")) is None


def test_value_completer_for_files(root):
    add = root.find_next("remote").find_next("add")
    add.flags().add_string("config")
    add.mark_flag_filename("config", "yaml")
    assert isinstance(value_completer(root, ["remote", "add"], add.flag("config")), PathCompleter)


@pytest.mark.asyncio
async def test_run_interactive_builds_argv(root):
    ask, prompts = scripted(["develop", "abc", "3", "x", "y", "", "", "origin git@host"])
    argv = await run_interactive(root, select=picker("remote", "add"), ask=ask)
    assert argv == [
        "remote",
        "add",
        "--branch=develop",
        "--depth=3",
        "--tag=x",
        "--tag=y",
        "origin",
        "git@host",
    ]
    messages = [message for message, _ in prompts]
    assert messages[0] == "--branch (Branch to track) > "
    assert messages[1] == messages[2] == "--depth (Fetch depth) [0] > "
    assert messages[3] == "--tag (Tags) [empty to finish] > "
    assert messages[-1] == "Arguments > "
    assert not root.find_next("remote").find_next("add").flags().changed("branch")


@pytest.mark.asyncio
async def test_required_flag_insists(root):
    add = root.find_next("remote").find_next("add")
    add.mark_flag_required("branch")
    ask, prompts = scripted(["", "main", "", "", "", "a b"])
    argv = await run_interactive(root, select=picker("remote", "add"), ask=ask)
    assert argv == ["remote", "add", "--branch=main", "a", "b"]
    assert prompts[0][0] == "--branch (Branch to track) [required] > "
    assert prompts[0][0] == prompts[1][0]


@pytest.mark.asyncio
async def test_leaf_command_with_empty_answers(root):
    ask, _ = scripted(["", "", "", "", ""])
    argv = await run_interactive(root, select=picker("status"), ask=ask)
    assert argv == ["status"]
