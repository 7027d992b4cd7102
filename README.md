# minifs

A small file system that lives in memory: directories and text files arranged
in a tree, driven from an interactive shell or from Python. The whole tree can
be saved to a binary snapshot and loaded back, and its structure can be
exported as JSON.

## Installing

```
pip install .
```

## The shell

```
minifs
```

On start the shell loads `minifs.dat` from the current directory if it exists
(printing `File system loaded from minifs.dat`), otherwise it prints
`No save file found. Starting a new file system.` and begins with an empty
root. On `exit` or end of input it saves the tree back to `minifs.dat` and
prints `Exiting MiniFS. Goodbye!`.

```
MiniFS:/$ mkdir docs
MiniFS:/$ echo hello world > docs/note.txt
MiniFS:/$ ls docs
- note.txt (11 bytes)
MiniFS:/$ cd docs
MiniFS:/docs$ cat note.txt
hello world
MiniFS:/docs$ exit
```

Commands:

| command | effect |
| --- | --- |
| `mkdir <path>` | create a directory |
| `touch <path>` | create an empty file if nothing of that name exists |
| `ls [path]` | list a directory (`d name/` for directories, `- name (N bytes)` for files); for a file, print its name |
| `cd [path]` | change directory; with no argument go to `/` |
| `pwd` | print the current directory |
| `rm <path>` | remove a file or an empty directory |
| `cat <path>` | print a file's content (nothing for an empty file) |
| `echo <words...> > <path>` | write the words, joined by single spaces, to a file, creating it if needed |
| `mv <source> <dest>` | move or rename; into `dest` if it is a directory |
| `cp <source> <dest>` | copy recursively; into `dest` if it is a directory |
| `tree` | export the tree structure to `fs_tree.json` in the current directory |
| `exit` | stop the shell |

Paths may be absolute or relative and may use `.` and `..` (`..` at the root
stays at the root). Words on a command line are separated by spaces or tabs;
there is no quoting. Errors are printed to standard error and the shell goes
on. `mv` and `cp` refuse to overwrite an existing name, and `mv` refuses to
move a directory into itself. Removing the current directory moves the shell
back to `/`.

## From Python

```python
from minifs.fs import FileSystem, FileSystemError, load

fs = FileSystem()
fs.mkdir("/projects")
fs.echo("/projects/readme.txt", "first draft")
fs.cd("/projects")
print(fs.pwd())                 # /projects
print(fs.cat("readme.txt"))     # first draft
fs.cp("readme.txt", "copy.txt")
print(fs.ls())                  # ['- readme.txt (11 bytes)', '- copy.txt (11 bytes)']

try:
    fs.rm("/projects")
except FileSystemError as exc:
    print(exc)                  # rm: cannot remove '/projects': Directory not empty

fs.save("snapshot.dat")
restored = load("snapshot.dat")
print(restored.to_json())
```

`FileSystem.resolve()` returns the `Node` at a path, or `None`. A `Node` has
`name`, `type` (`NodeType.FILE` or `NodeType.DIR`), `content`, `parent` and
`children`, and the methods `is_dir()`, `size()` (content length in UTF-8
bytes) and `path()`.

`FileSystem.to_bytes()` and `minifs.fs.from_bytes()` give the snapshot format
without touching the disk; `load()` raises `FileNotFoundError` for a missing
file and `FileSystemError` for a damaged one. `FileSystem.to_json()` returns
the JSON tree (names and kinds only, no file contents) and
`FileSystem.export_tree_json()` writes it to a file.

The shell can be driven programmatically through `minifs.shell.Shell`: its
`execute()` method runs one command line and returns `False` on `exit`, and
`run()` reads commands from a text stream. `minifs.tokens.split_string()`
splits a command line into words.

## What it does not do

Everything lives in memory until it is saved as a single snapshot file; the
tree is never mapped onto real files or directories. Files hold text only, and
there are no permissions, owners, timestamps or links.