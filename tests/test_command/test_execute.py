from io import StringIO

import pytest

from adder import Command, Group, exact_args
from adder.exceptions import (
    FlagError,
    FlagGroupError,
    InvalidArgCountError,
    RequiredFlagError,
    UnknownCommandError,
)


def build_app(calls):
    def hook(label):
        def record(cmd, args):
            calls.append((label, cmd.name, list(args)))

        return record

    async def async_run(cmd, args):
        calls.append(("run", cmd.name, list(args)))

    root = Command(
        use="app",
        short="Demo app",
        version="1.2.3",
        persistent_pre_run=hook("root-persistent-pre"),
        persistent_post_run=hook("root-persistent-post"),
    )
    root.persistent_flags().add_bool("debug", "d", usage="Enable debug output")
    remote = Command(
        use="remote",
        short="Manage remotes",
        persistent_pre_run=hook("remote-persistent-pre"),
    )
    add = Command(
        use="add NAME URL",
        short="Add a remote",
        args=exact_args(2),
        pre_run=hook("pre"),
        run=async_run,
        post_run=hook("post"),
    )
    add.flags().add_string("branch", "b", usage="Branch to track")
    remote.add_command(add)
    root.add_command(remote)
    out, err = StringIO(), StringIO()
    root.set_out(out)
    root.set_err(err)
    return root, out, err


@pytest.mark.asyncio
async def test_execute_runs_hooks_in_order():
    calls = []
    root, _, _ = build_app(calls)
    cmd = await root.execute_async(["remote", "add", "--debug", "origin", "url"])
    assert cmd.command_path == "app remote add"
    assert calls == [
        ("remote-persistent-pre", "add", ["origin", "url"]),
        ("pre", "add", ["origin", "url"]),
        ("run", "add", ["origin", "url"]),
        ("post", "add", ["origin", "url"]),
        ("root-persistent-post", "add", ["origin", "url"]),
    ]
    assert root.persistent_flags().get("debug") is True


@pytest.mark.asyncio
async def test_traverse_run_hooks_runs_every_persistent_hook():
    calls = []
    root, _, _ = build_app(calls)
    root.dispatch_options.traverse_run_hooks = True
    await root.execute_async(["remote", "add", "origin", "url"])
    labels = [label for label, _, _ in calls]
    assert labels == [
        "root-persistent-pre",
        "remote-persistent-pre",
        "pre",
        "run",
        "post",
        "root-persistent-post",
    ]


@pytest.mark.asyncio
async def test_execute_from_child_delegates_to_root():
    calls = []
    root, _, _ = build_app(calls)
    remote = root.find_next("remote")
    cmd = await remote.execute_async(["remote", "add", "a", "b"])
    assert cmd.name == "add"


def test_execute_sync_uses_set_args():
    calls = []
    root, _, _ = build_app(calls)
    root.set_args(["remote", "add", "x", "y"])
    assert root.execute().name == "add"
    assert ("run", "add", ["x", "y"]) in calls


@pytest.mark.asyncio
async def test_help_flag_renders_help():
    root, out, _ = build_app([])
    await root.execute_async(["remote", "add", "--help"])
    text = out.getvalue()
    assert "Add a remote" in text
    assert "Usage:" in text
    assert "app remote add NAME URL [flags]" in text
    assert "--branch" in text
    assert "Global Flags:" in text
    assert "--debug" in text


@pytest.mark.asyncio
async def test_non_runnable_command_renders_help():
    calls = []
    root, out, _ = build_app(calls)
    await root.execute_async([])
    text = out.getvalue()
    assert "Available Commands:" in text
    assert "remote" in text
    assert "completion" in text
    assert "help" in text
    assert calls == []


@pytest.mark.asyncio
async def test_command_listing_shows_first_line_of_short():
    root, out, _ = build_app([])
    root.add_command(Command(use="sync", short="Sync remotes\nPulls every branch.", run=lambda c, a: None))
    await root.execute_async([])
    text = out.getvalue()
    assert "Sync remotes" in text
    assert "Pulls every branch." not in text


@pytest.mark.asyncio
async def test_version_flag():
    root, out, _ = build_app([])
    await root.execute_async(["--version"])
    assert out.getvalue().strip() == "app version 1.2.3"


@pytest.mark.asyncio
async def test_help_command():
    root, out, _ = build_app([])
    await root.execute_async(["help", "remote", "add"])
    assert "Add a remote" in out.getvalue()


@pytest.mark.asyncio
async def test_help_command_unknown_topic():
    root, out, err = build_app([])
    await root.execute_async(["help", "nope"])
    assert "Unknown help topic 'nope'" in out.getvalue()


@pytest.mark.asyncio
async def test_argument_count_error_is_reported_and_raised():
    root, _, err = build_app([])
    with pytest.raises(InvalidArgCountError):
        await root.execute_async(["remote", "add", "only-one"])
    text = err.getvalue()
    assert "Error: accepts 2 arg(s), received 1" in text
    assert "Usage:" in text


@pytest.mark.asyncio
async def test_silenced_errors():
    root, _, err = build_app([])
    root.silence_errors = True
    root.silence_usage = True
    with pytest.raises(InvalidArgCountError):
        await root.execute_async(["remote", "add", "only-one"])
    assert err.getvalue() == ""


@pytest.mark.asyncio
async def test_custom_error_prefix():
    root, _, err = build_app([])
    root.error_prefix = "Oops:"
    with pytest.raises(FlagError):
        await root.execute_async(["remote", "add", "--nope", "a", "b"])
    assert "Oops: unknown flag: --nope" in err.getvalue()


@pytest.mark.asyncio
async def test_unknown_command():
    root, _, err = build_app([])
    with pytest.raises(UnknownCommandError):
        await root.execute_async(["remot"])
    text = err.getvalue()
    assert 'Error: unknown command "remot" for "app"' in text
    assert "Run 'app --help' for usage." in text


@pytest.mark.asyncio
async def test_required_flag():
    calls = []
    root, _, _ = build_app(calls)
    add = root.find_next("remote").find_next("add")
    add.mark_flag_required("branch")
    with pytest.raises(RequiredFlagError, match='required flag\\(s\\) "branch" not set'):
        await root.execute_async(["remote", "add", "a", "b"])
    assert ("run", "add", ["a", "b"]) not in calls
    await root.execute_async(["remote", "add", "-b", "main", "a", "b"])
    assert ("run", "add", ["a", "b"]) in calls


@pytest.mark.asyncio
async def test_flag_groups_are_validated():
    root, _, _ = build_app([])
    add = root.find_next("remote").find_next("add")
    add.flags().add_bool("json")
    add.flags().add_bool("yaml")
    add.mark_flags_mutually_exclusive("json", "yaml")
    with pytest.raises(FlagGroupError, match="none of the others can be"):
        await root.execute_async(["remote", "add", "--json", "--yaml", "a", "b"])


@pytest.mark.asyncio
async def test_group_with_persistent_member():
    root, _, _ = build_app([])
    add = root.find_next("remote").find_next("add")
    add.mark_flags_required_together("debug", "branch")
    with pytest.raises(FlagGroupError, match="missing \\[branch\\]"):
        await root.execute_async(["--debug", "remote", "add", "a", "b"])


@pytest.mark.asyncio
async def test_deprecated_command_notice():
    calls = []
    root, out, _ = build_app(calls)
    root.add_command(
        Command(use="old", deprecated="use remote instead", run=lambda cmd, args: None)
    )
    await root.execute_async(["old"])
    assert 'Command "old" is deprecated, use remote instead' in out.getvalue()


@pytest.mark.asyncio
async def test_deprecated_flag_notice():
    root, _, err = build_app([])
    add = root.find_next("remote").find_next("add")
    add.flags().add("track", type="bool", deprecated="use --branch")
    await root.execute_async(["remote", "add", "--track", "a", "b"])
    assert "Flag --track has been deprecated, use --branch" in err.getvalue()


@pytest.mark.asyncio
async def test_traverse_children_parses_parent_flags():
    calls = []
    root, _, _ = build_app(calls)
    root.traverse_children = True
    root.flags().add_string("root-only", usage="Only on the root")
    await root.execute_async(["--root-only=x", "remote", "add", "a", "b"])
    assert root.flags().get("root-only") == "x"
    assert ("run", "add", ["a", "b"]) in calls


@pytest.mark.asyncio
async def test_grouped_help_output():
    root, out, _ = build_app([])
    root.add_group(Group("net", "Network Commands:"))
    root.find_next("remote").group_id = "net"
    await root.execute_async(["--help"])
    text = out.getvalue()
    assert "Network Commands:" in text
    assert "Additional Commands:" in text


@pytest.mark.asyncio
async def test_flag_parsing_disabled_passes_everything_through():
    seen = []
    root = Command(use="wrap", disable_flag_parsing=True, run=lambda cmd, args: seen.extend(args))
    await root.execute_async(["--anything", "-x", "value"])
    assert seen == ["--anything", "-x", "value"]
