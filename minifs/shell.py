"""Interactive command shell over an in-memory file system."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator, Optional, Sequence, TextIO, Union

from minifs.fs import FileSystem, FileSystemError, load
from minifs.tokens import split_string

SAVE_FILE = "minifs.dat"
JSON_TREE_FILE = "fs_tree.json"

# A line is read in pieces of at most this many characters; the rest of a
# longer line is taken as the next command.
_MAX_LINE = 1023


def _chunks(stream: TextIO) -> Iterator[str]:
    for line in stream:
        while len(line) > _MAX_LINE:
            yield line[:_MAX_LINE]
            line = line[_MAX_LINE:]
        yield line


class Shell:
    """Reads commands and runs them against a :class:`FileSystem`."""

    def __init__(
        self,
        fs: Optional[FileSystem] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        tree_file: Union[str, Path] = JSON_TREE_FILE,
    ) -> None:
        self.fs = fs if fs is not None else FileSystem()
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.tree_file = tree_file

    def prompt(self) -> str:
        return f"MiniFS:{self.fs.pwd()}$ "

    def _print(self, text: str) -> None:
        print(text, file=self.out)

    def _error(self, text: str) -> None:
        print(text, file=self.err)

    def execute(self, line: str) -> bool:
        """Run one command line; return False when the shell should stop."""
        args = split_string(line)
        if not args:
            return True
        command = args[0]
        if command == "exit":
            return False
        try:
            self._dispatch(command, args)
        except FileSystemError as exc:
            self._error(str(exc))
        return True

    def _dispatch(self, command: str, args: Sequence[str]) -> None:
        fs = self.fs
        argc = len(args)
        if command in ("mkdir", "touch", "rm", "cat"):
            if argc < 2:
                self._error(f"{command}: missing operand")
            elif command == "mkdir":
                fs.mkdir(args[1])
            elif command == "touch":
                fs.touch(args[1])
            elif command == "rm":
                fs.rm(args[1])
            else:
                content = fs.cat(args[1])
                if content:
                    self._print(content)
        elif command == "ls":
            for entry in fs.ls(args[1] if argc > 1 else ""):
                self._print(entry)
        elif command == "cd":
            fs.cd(args[1] if argc > 1 else "/")
        elif command == "pwd":
            self._print(fs.pwd())
        elif command in ("mv", "cp"):
            if argc < 3:
                self._error(f"Usage: {command} <source> <destination>")
            elif command == "mv":
                fs.mv(args[1], args[2])
            else:
                fs.cp(args[1], args[2])
        elif command == "tree":
            try:
                fs.export_tree_json(self.tree_file)
            except OSError as exc:
                self._error(f"Error opening file for JSON export: {exc.strerror}")
            else:
                self._print(f"File system tree exported to {self.tree_file}")
        elif command == "echo":
            if argc > 3 and args[-2] == ">":
                fs.echo(args[-1], " ".join(args[1:-2]))
            else:
                self._error("Usage: echo <content> > <filepath>")
        else:
            self._error(f"{command}: command not found")

    def run(self, stdin: TextIO) -> None:
        """Prompt for and run commands until ``exit`` or end of input."""
        lines = _chunks(stdin)
        while True:
            self.out.write(self.prompt())
            self.out.flush()
            line = next(lines, None)
            if line is None:
                self.out.write("\n")
                break
            if not self.execute(line):
                break


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the saved tree, run the shell on standard input, then save.

    ``argv`` is accepted for use as an entry point; no options are recognised.
    """
    try:
        fs = load(SAVE_FILE)
    except OSError:
        print("No save file found. Starting a new file system.")
        fs = FileSystem()
    except FileSystemError as exc:
        print(f"Cannot read {SAVE_FILE}: {exc}", file=sys.stderr)
        print("No save file found. Starting a new file system.")
        fs = FileSystem()
    else:
        print(f"File system loaded from {SAVE_FILE}")

    Shell(fs).run(sys.stdin)

    try:
        fs.save(SAVE_FILE)
    except OSError as exc:
        print(f"Error opening file for saving: {exc.strerror}", file=sys.stderr)
    else:
        print(f"File system saved to {SAVE_FILE}")

    print("Exiting MiniFS. Goodbye!")
    return 0