import json

import pytest

from minifs.fs import FileSystem, FileSystemError, NodeType, from_bytes, load


@pytest.fixture
def fs():
    return FileSystem()


def test_empty_root_wire_format(fs):
    expected = (
        b"\x01\x00\x00\x00"
        + b"\x02\x00\x00\x00\x00\x00\x00\x00"
        + b"/\x00"
        + b"\x00\x00\x00\x00"
    )
    assert fs.to_bytes() == expected


def test_mkdir_and_ls(fs):
    fs.mkdir("docs")
    fs.touch("notes")
    assert fs.ls("") == ["d docs/", "- notes (0 bytes)"]


def test_mkdir_existing_raises(fs):
    fs.mkdir("docs")
    with pytest.raises(FileSystemError, match="File or directory exists"):
        fs.mkdir("docs")


def test_mkdir_missing_parent_raises(fs):
    with pytest.raises(FileSystemError, match="No such file or directory"):
        fs.mkdir("nope/inner")


def test_touch_existing_keeps_content(fs):
    fs.echo("a.txt", "hello")
    fs.touch("a.txt")
    assert fs.cat("a.txt") == "hello"


def test_echo_and_cat(fs):
    fs.mkdir("d")
    fs.echo("/d/f", "some words")
    assert fs.cat("d/f") == "some words"
    assert fs.resolve("/d/f").size() == len("some words".encode())


def test_cat_unwritten_file_is_none(fs):
    fs.touch("f")
    assert fs.cat("f") is None


def test_cat_directory_raises(fs):
    fs.mkdir("d")
    with pytest.raises(FileSystemError, match="Is a directory"):
        fs.cat("d")


def test_echo_into_directory_raises(fs):
    fs.mkdir("d")
    with pytest.raises(FileSystemError, match="Is a directory"):
        fs.echo("d", "x")


def test_ls_of_file_gives_its_name(fs):
    fs.touch("f")
    assert fs.ls("f") == ["f"]


def test_ls_missing_raises(fs):
    with pytest.raises(FileSystemError, match="cannot access"):
        fs.ls("ghost")


def test_cd_and_pwd(fs):
    fs.mkdir("a")
    fs.mkdir("a/b")
    fs.cd("a/b")
    assert fs.pwd() == "/a/b"
    fs.cd("..")
    assert fs.pwd() == "/a"
    fs.cd("/")
    assert fs.pwd() == "/"


def test_dotdot_at_root_stays_at_root(fs):
    assert fs.resolve("../../.") is fs.root


def test_cd_errors(fs):
    fs.touch("f")
    with pytest.raises(FileSystemError, match="Not a directory"):
        fs.cd("f")
    with pytest.raises(FileSystemError, match="No such file"):
        fs.cd("missing")


def test_relative_paths_from_cwd(fs):
    fs.mkdir("a")
    fs.cd("a")
    fs.echo("f", "x")
    assert fs.resolve("/a/f").path() == "/a/f"


def test_rm_rules(fs):
    fs.mkdir("d")
    fs.touch("d/f")
    with pytest.raises(FileSystemError, match="Directory not empty"):
        fs.rm("d")
    fs.rm("d/f")
    fs.rm("d")
    assert fs.ls("") == []


def test_rm_root_and_missing(fs):
    with pytest.raises(FileSystemError, match="root"):
        fs.rm("/")
    with pytest.raises(FileSystemError, match="No such file"):
        fs.rm("ghost")


def test_mv_rename(fs):
    fs.echo("a", "data")
    fs.mv("a", "b")
    assert fs.resolve("a") is None
    assert fs.cat("b") == "data"


def test_mv_into_directory(fs):
    fs.mkdir("d")
    fs.echo("f", "data")
    fs.mv("f", "d")
    assert fs.ls("d") == fs.ls("/d")
    assert fs.cat("/d/f") == "data"
    assert fs.resolve("/d/f").parent is fs.resolve("/d")


def test_mv_conflict_and_invalid(fs):
    fs.touch("a")
    fs.touch("b")
    with pytest.raises(FileSystemError, match="already exists"):
        fs.mv("a", "b")
    with pytest.raises(FileSystemError, match="Invalid source"):
        fs.mv("/", "x")
    with pytest.raises(FileSystemError, match="not found"):
        fs.mv("a", "missing/x")


def test_mv_into_itself_rejected(fs):
    fs.mkdir("d")
    with pytest.raises(FileSystemError):
        fs.mv("d", "d")
    assert fs.resolve("/d").parent is fs.root


def test_cp_is_deep_and_independent(fs):
    fs.mkdir("src")
    fs.echo("src/f", "one")
    fs.cp("src", "dst")
    fs.echo("src/f", "two")
    assert fs.cat("dst/f") == "one"
    assert fs.cat("src/f") == "two"


def test_cp_errors(fs):
    fs.touch("a")
    with pytest.raises(FileSystemError, match="cannot stat"):
        fs.cp("ghost", "x")
    with pytest.raises(FileSystemError, match="already exists"):
        fs.cp("a", "a")


def test_bytes_round_trip(fs):
    fs.mkdir("d")
    fs.echo("d/f", "hello")
    fs.echo("empty", "")
    fs.touch("blank")
    again = from_bytes(fs.to_bytes())
    assert again.to_bytes() == fs.to_bytes()
    assert again.cat("/d/f") == "hello"
    assert again.cat("empty") == ""
    assert again.cat("blank") is None
    assert again.resolve("d").type is NodeType.DIR


def test_save_and_load(fs, tmp_path):
    fs.mkdir("x")
    target = tmp_path / "image.dat"
    fs.save(target)
    assert load(target).ls("") == ["d x/"]


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load(tmp_path / "absent.dat")


@pytest.mark.parametrize("data", [b"", b"\x01\x00", b"\x07\x00\x00\x00"])
def test_from_bytes_rejects_bad_images(data):
    with pytest.raises(FileSystemError):
        from_bytes(data)


def test_to_json_structure(fs, tmp_path):
    fs.mkdir("d")
    fs.touch("d/f")
    fs.mkdir("e")
    tree = json.loads(fs.to_json())
    assert tree["name"] == "/"
    assert [c["name"] for c in tree["children"]] == ["d", "e"]
    assert tree["children"][0]["children"][0]["type"] == "file"
    assert "children" not in tree["children"][1]
    out = tmp_path / "tree.json"
    fs.export_tree_json(out)
    assert out.read_text(encoding="utf-8") == fs.to_json()


def test_empty_tree_json(fs):
    assert fs.to_json() == '{"name":"/","type":"directory"}'