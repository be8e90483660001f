from pathlib import Path

import pytest

import hostplan.resolver as resolver_mod
from hostplan import (
    BadAddress,
    Bookmark,
    Host,
    SshConfigUnreadable,
    SshHostNotFound,
    TooManyArguments,
    resolve,
)
from hostplan.resolver import ArgKind, classify_args, split_ssh_alias
from hostplan.transfer import FileTransferProtocol


def _resolve(ssh_config_file=None, *, bookmarks=(), ssh_aliases=(), positionals=(), passwords=()):
    return resolve(
        list(bookmarks),
        list(ssh_aliases),
        list(positionals),
        list(passwords),
        ssh_config_path=ssh_config_file or Path("/nonexistent/ssh_config"),
    )


def test_single_remote():
    plan = _resolve(positionals=["scp://host1"])
    assert isinstance(plan.target, Host)
    assert plan.target.params.protocol is FileTransferProtocol.SCP
    assert plan.target.params.address == "host1"
    assert plan.bridge is None
    assert plan.local_dir is None


def test_two_remotes_first_is_target_second_is_bridge():
    plan = _resolve(positionals=["scp://host1", "scp://host2"])
    assert isinstance(plan.target, Host)
    assert isinstance(plan.bridge, Host)
    assert plan.target.params.address == "host1"
    assert plan.bridge.params.address == "host2"
    assert plan.local_dir is None


def test_two_remotes_and_trailing_local_dir(tmp_path: Path):
    plan = _resolve(positionals=["scp://host1", "scp://host2", str(tmp_path)])
    assert plan.target.params.address == "host1"
    assert plan.bridge.params.address == "host2"
    assert plan.local_dir == tmp_path


def test_only_local_dir_is_local_mode(tmp_path: Path):
    plan = _resolve(positionals=[str(tmp_path)])
    assert plan.is_local_only
    assert plan.bridge is None
    assert plan.local_dir == tmp_path


def test_no_arguments():
    plan = _resolve()
    assert plan.target is None
    assert plan.bridge is None
    assert plan.local_dir is None


def test_existing_path_not_last_is_resolved_as_address(tmp_path: Path):
    plan = _resolve(positionals=[str(tmp_path), "scp://host1"])
    assert plan.local_dir is None
    assert isinstance(plan.target, Host)
    assert plan.target.params.address == str(tmp_path)
    assert plan.bridge.params.address == "host1"


def test_one_bookmark():
    plan = _resolve(bookmarks=["foo"])
    assert plan.target == Bookmark("foo")
    assert plan.bridge is None


def test_two_bookmarks():
    plan = _resolve(bookmarks=["foo", "bar"])
    assert plan.target == Bookmark("foo")
    assert plan.bridge == Bookmark("bar")


def test_two_bookmarks_and_local_dir(tmp_path: Path):
    plan = _resolve(bookmarks=["foo", "bar"], positionals=[str(tmp_path)])
    assert plan.target == Bookmark("foo")
    assert plan.bridge == Bookmark("bar")
    assert plan.local_dir == tmp_path


def test_bookmark_comes_before_positional():
    plan = _resolve(bookmarks=["foo"], positionals=["scp://host1"])
    assert plan.target == Bookmark("foo")
    assert isinstance(plan.bridge, Host)
    assert plan.bridge.params.address == "host1"


def test_bookmark_remote_and_local_dir(tmp_path: Path):
    plan = _resolve(bookmarks=["foo"], positionals=["scp://host1", str(tmp_path)])
    assert plan.target == Bookmark("foo")
    assert plan.bridge.params.address == "host1"
    assert plan.local_dir == tmp_path


def test_last_bookmark_naming_existing_path_becomes_local_dir(tmp_path: Path, monkeypatch):
    (tmp_path / "backup").mkdir()
    monkeypatch.chdir(tmp_path)
    plan = _resolve(bookmarks=["prod", "backup"])
    assert plan.target == Bookmark("prod")
    assert plan.bridge is None
    assert plan.local_dir == Path("backup")


def test_last_ssh_alias_naming_existing_path_becomes_local_dir(
    tmp_path: Path, monkeypatch, ssh_config_file: Path
):
    (tmp_path / "myhost").mkdir()
    monkeypatch.chdir(tmp_path)
    # alias comes before the positional, so it is not the last token
    plan = _resolve(ssh_config_file, ssh_aliases=["myhost"], positionals=["scp://host1"])
    assert plan.local_dir is None
    assert plan.target.params.address == "10.0.0.5"

    plan = _resolve(ssh_config_file, ssh_aliases=["myhost"])
    assert plan.target is None
    assert plan.local_dir == Path("myhost")


def test_too_many_arguments_before_any_parsing(monkeypatch):
    def fail(*_args, **_kwargs):
        raise AssertionError("must not be called")

    monkeypatch.setattr(resolver_mod, "load_ssh_config", fail)
    monkeypatch.setattr(resolver_mod, "parse_address", fail)
    with pytest.raises(TooManyArguments, match="Too many arguments"):
        _resolve(
            bookmarks=["foo"],
            ssh_aliases=["myhost"],
            positionals=["not a ://valid address", "scp://host2"],
        )


def test_password_pairs_with_first_concatenated_token():
    plan = _resolve(positionals=["scp://host1", "scp://host2"], passwords=["secret"])
    assert plan.target.password == "secret"
    assert plan.bridge.password is None


def test_passwords_follow_concatenation_order_across_classes(ssh_config_file: Path):
    plan = _resolve(
        ssh_config_file,
        bookmarks=["foo"],
        ssh_aliases=["myhost"],
        passwords=["for-bookmark", "for-alias", "unused"],
    )
    assert plan.target == Bookmark("foo", "for-bookmark")
    assert plan.bridge.password == "for-alias"


def test_password_of_local_dir_slot_is_dropped(tmp_path: Path):
    plan = _resolve(positionals=["scp://host1", str(tmp_path)], passwords=["a", "b"])
    assert plan.target.password == "a"
    assert plan.local_dir == tmp_path


def test_bad_address():
    with pytest.raises(BadAddress, match="^Bad address option: Unknown protocol 'gopher'"):
        _resolve(positionals=["gopher://host1"])


def test_ssh_alias_with_remote_path(ssh_config_file: Path):
    plan = _resolve(ssh_config_file, ssh_aliases=["myhost:/data"])
    assert isinstance(plan.target, Host)
    params = plan.target.params
    assert params.protocol is FileTransferProtocol.SFTP
    assert params.address == "10.0.0.5"
    assert params.port == 2222
    assert params.username == "bob"
    assert params.remote_path == "/data"


def test_ssh_alias_defaults(ssh_config_file: Path):
    plan = _resolve(ssh_config_file, ssh_aliases=["bare:"])
    params = plan.target.params
    assert params.address == "bare"
    assert params.port == 22
    assert params.username is None
    assert params.remote_path is None


def test_ssh_alias_matches_any_listed_pattern(ssh_config_file: Path):
    plan = _resolve(ssh_config_file, ssh_aliases=["web-new"])
    assert plan.target.params.address == "web.example.com"


@pytest.mark.parametrize("alias", ["unknown", "blocked", "web-old", "web*"])
def test_ssh_alias_not_found(ssh_config_file: Path, alias: str):
    with pytest.raises(SshHostNotFound) as excinfo:
        _resolve(ssh_config_file, ssh_aliases=[alias])
    assert excinfo.value.alias == alias
    assert str(ssh_config_file) in str(excinfo.value)


def test_ssh_config_missing():
    with pytest.raises(SshConfigUnreadable):
        _resolve(ssh_aliases=["myhost"])


def test_ssh_config_read_once(ssh_config_file: Path, monkeypatch):
    calls = []
    original = resolver_mod.load_ssh_config

    def counting(path):
        calls.append(path)
        return original(path)

    monkeypatch.setattr(resolver_mod, "load_ssh_config", counting)
    plan = _resolve(ssh_config_file, ssh_aliases=["myhost", "web"])
    assert plan.target.params.address == "10.0.0.5"
    assert plan.bridge.params.address == "web.example.com"
    assert len(calls) == 1


def test_ssh_config_not_read_without_aliases(monkeypatch):
    monkeypatch.setattr(
        resolver_mod, "load_ssh_config", lambda path: pytest.fail("SSH config was read")
    )
    plan = _resolve(bookmarks=["foo"], positionals=["host1"])
    assert plan.bridge.params.address == "host1"


def test_default_protocol_applies_to_bare_addresses():
    plan = resolve(
        [], [], ["host1"], [],
        ssh_config_path="/nonexistent",
        default_protocol=FileTransferProtocol.FTP,
    )
    assert plan.target.params.protocol is FileTransferProtocol.FTP
    assert plan.target.params.port == 21


def test_classify_args_tags_and_last_flag():
    args = classify_args(["bm"], ["alias"], ["addr"], ["pw"])
    assert [a.kind for a in args] == [ArgKind.BOOKMARK, ArgKind.SSH_ALIAS, ArgKind.ADDRESS]
    assert [a.password for a in args] == ["pw", None, None]
    assert [a.is_last for a in args] == [False, False, True]
    assert classify_args([], [], [], []) == []


@pytest.mark.parametrize(
    "token, expected",
    [
        ("host", ("host", None)),
        ("host:", ("host", None)),
        ("host:/var/www", ("host", "/var/www")),
        ("host:rel:path", ("host", "rel:path")),
    ],
)
def test_split_ssh_alias(token, expected):
    assert split_ssh_alias(token) == expected


def test_overlong_last_token_is_resolved_as_address():
    plan = _resolve(positionals=["a" * 300])
    assert plan.local_dir is None
    assert plan.target.params.address == "a" * 300


def test_empty_last_positional_is_a_bad_address():
    with pytest.raises(BadAddress, match="^Bad address option: Address is empty"):
        _resolve(positionals=[""])


def test_empty_last_bookmark_is_not_the_current_directory():
    plan = _resolve(bookmarks=[""])
    assert plan.target == Bookmark("")
    assert plan.local_dir is None
