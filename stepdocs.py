"""
Turn a repository's commit history into step-by-step markdown docs.

Every commit whose subject carries a step tag such as ``[1.2] Add parser``
becomes one page showing what changed in that commit. Pages are linked with
Previous / Next navigation and a ``_Sidebar.md`` that mirrors the step
numbering, so the output drops straight into a GitHub wiki.

Pipeline:
- ``git log`` text  -> GitLogParser  -> CommitRecord
- ``git show`` text -> GitDiffParser -> DiffRecord (hunks of DiffLine)
- normalize / join / result -> markdown page per step
- build_navigation -> prev/next links + sidebar
"""

from __future__ import annotations
import argparse
import dataclasses
import enum
import functools
import itertools
import pathlib
import re
import subprocess
import sys
from typing import Dict, List, Optional, Tuple

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

# ---- constants & utilities ---------------------------------------------------

APP_VERSION = "stepdocs-0.1.0"
APP_URL = "https://github.com/Wireless4024/stepdocs-proto"
MARKER = "diff"
HUNK_MARKER = "@@"
PREV_MARKER = "!!PREV_MARKER!!"
NEXT_MARKER = "!!NEXT_MARKER!!"
SIDEBAR_FILE = "_Sidebar.md"
MODES = ("ghwiki", "markdown")
DEFAULT_MODE = "ghwiki"
DEFAULT_RETRIES = 2

STEP_TITLE_RE = re.compile(r"^\[(\d+(?:\.\d+)*)\] (.+)$")
SCP_REMOTE_RE = re.compile(r"^[\w.-]+@([^:/]+):(.+)$")

LANGUAGE_OVERRIDES = {
    "js": "javascript",
    "ts": "typescript",
    "sh": "shell",
    "md": "markdown",
}


def run(cmd: List[str], cwd: str | None = None, check: bool = True) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, cwd=cwd, check=check, text=True, capture_output=True)


class StepDocsError(Exception):
    """Base class for errors raised while building step docs."""


class DiffParseError(StepDocsError):
    """
    A hunk header could not be parsed.

    git occasionally produces inconsistent output mid-stream, so running the
    producing command again usually helps.
    """

    def __init__(self, detail: str):
        super().__init__(f"{detail} (unexpected diff output, you can try to run again)")
        self.detail = detail


# ---- line cursor -------------------------------------------------------------

class LineCursor:
    """Single-pass line reader that can un-read the line it returned last."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.prev = 0

    def next_line(self) -> Optional[str]:
        text = self.text
        start = self.pos
        size = len(text)
        if start >= size:
            return None
        end = start
        while end < size and text[end] not in "\r\n":
            end += 1
        following = end
        if following < size:
            following += 2 if text.startswith("\r\n", end) else 1
        self.prev = start
        self.pos = following
        return text[start:end]

    def rollback(self) -> None:
        self.pos = self.prev


# ---- git log -----------------------------------------------------------------

@dataclasses.dataclass(frozen=True)
class CommitRecord:
    hash: str
    author: Optional[str] = None
    date: Optional[str] = None
    message: Optional[str] = None


COMMIT_HEADERS = ("Author", "Date", "Merge")


class GitLogParser:
    """Reads the default ``git log`` format one commit at a time."""

    def __init__(self, text: str):
        self.cursor = LineCursor(text)

    def __iter__(self):
        return iter(self.next, None)

    def next(self) -> Optional[CommitRecord]:
        cursor = self.cursor
        line = cursor.next_line()
        while line is not None and not line.strip():
            line = cursor.next_line()
        if line is None or not line.startswith("commit "):
            return None
        commit_hash = line[len("commit "):].strip()

        headers: Dict[str, str] = {}
        line = cursor.next_line()
        while line is not None and line.strip():
            label, sep, value = line.partition(":")
            if not sep or label not in COMMIT_HEADERS:
                # separator line expected before the message
                return None
            headers[label] = value.strip()
            line = cursor.next_line()

        body: List[str] = []
        line = cursor.next_line() if line is not None else None
        while line:
            body.append(line[4:])
            line = cursor.next_line()

        return CommitRecord(
            hash=commit_hash,
            author=headers.get("Author"),
            date=headers.get("Date"),
            message="\n".join(body).strip(),
        )


# ---- git diff ----------------------------------------------------------------

class LineKind(enum.Enum):
    ADDED = "+"
    REMOVED = "-"
    CONTEXT = " "


@dataclasses.dataclass(frozen=True)
class DiffLine:
    kind: LineKind
    content: str


@dataclasses.dataclass(frozen=True)
class Range:
    start: int
    count: int


@dataclasses.dataclass
class Hunk:
    source: Range
    result: Range
    lines: List[DiffLine] = dataclasses.field(default_factory=list)


EMPTY_RANGE = Range(0, 0)


@dataclasses.dataclass
class DiffRecord:
    command_line: str
    index_line: str
    source_path: str
    result_path: str
    hunks: List[Hunk] = dataclasses.field(default_factory=list)
    new_file: Optional[str] = None
    deleted_file: Optional[str] = None
    old_mode: Optional[str] = None
    new_mode: Optional[str] = None
    similarity: Optional[str] = None
    rename_from: Optional[str] = None
    rename_to: Optional[str] = None
    copy_from: Optional[str] = None
    copy_to: Optional[str] = None

    @property
    def source_range(self) -> Range:
        return self.hunks[0].source if self.hunks else EMPTY_RANGE

    @property
    def result_range(self) -> Range:
        return self.hunks[0].result if self.hunks else EMPTY_RANGE

    @property
    def lines(self) -> List[DiffLine]:
        return self.hunks[0].lines if self.hunks else []


# git's extended header lines between the marker and "--- ", by prefix
EXTENDED_HEADERS = (
    ("old mode ", "old_mode"),
    ("new mode ", "new_mode"),
    ("similarity index ", "similarity"),
    ("dissimilarity index ", "similarity"),
    ("rename from ", "rename_from"),
    ("rename to ", "rename_to"),
    ("copy from ", "copy_from"),
    ("copy to ", "copy_to"),
)


def paths_from_marker(command_line: str) -> Tuple[str, str]:
    """``diff --git a/x b/x`` -> (``a/x``, ``b/x``)."""
    tokens = command_line.split()
    return tokens[-2], tokens[-1]


def _parse_range(text: str, result_side: bool) -> Range:
    start_txt, _, count_txt = text[1:].partition(",")
    start = int(start_txt)
    if count_txt:
        return Range(start, int(count_txt))
    return Range(start, start if result_side else 0)


def parse_hunk_header(line: str) -> Tuple[Range, Range]:
    """Parse ``@@ -s[,c] +s[,c] @@ [section]`` into (source, result) ranges."""
    try:
        source_txt, result_txt = line[3:].split(" ")[:2]
        if not source_txt.startswith("-") or not result_txt.startswith("+"):
            raise ValueError(line)
        return _parse_range(source_txt, False), _parse_range(result_txt, True)
    except ValueError as e:
        raise DiffParseError(f"Malformed hunk header {line!r}") from e


class GitDiffParser:
    """
    Reads unified diff text one file at a time.

    With ``show_mode`` the commit preamble printed by ``git show`` is skipped;
    otherwise the text must start at a ``diff`` marker line, as ``git diff``
    output does.
    """

    def __init__(self, text: str, show_mode: bool = False):
        self.cursor = LineCursor(text)
        self.show_mode = show_mode

    def __iter__(self):
        return iter(self.next, None)

    def next(self) -> Optional[DiffRecord]:
        cursor = self.cursor
        command_line = cursor.next_line()
        if self.show_mode:
            while command_line is not None and not command_line.startswith(MARKER):
                command_line = cursor.next_line()
        if not command_line or not command_line.startswith(MARKER):
            return None

        record = DiffRecord(command_line=command_line, index_line="", source_path="", result_path="")
        line = self._read_extended_headers(record)
        if line is None:
            # empty file, binary file, pure rename or mode-only change: no hunk
            source_path, result_path = paths_from_marker(command_line)
            old_name = record.rename_from or record.copy_from
            new_name = record.rename_to or record.copy_to
            record.source_path = f"a/{old_name}" if old_name else source_path
            record.result_path = f"b/{new_name}" if new_name else result_path
            return record
        record.source_path = line[4:]

        line = cursor.next_line()
        if line is None:
            record.result_path = paths_from_marker(command_line)[1]
            return record
        record.result_path = line[4:]

        header = cursor.next_line()
        if not header:
            return record
        if header.startswith(MARKER):
            cursor.rollback()
            return record
        if not header.startswith(HUNK_MARKER):
            if not header.endswith(HUNK_MARKER) and header.find(HUNK_MARKER, 3) != -1:
                raise DiffParseError(f"Hunk header expected, got {header!r}")
            return None

        while header is not None:
            source, result = parse_hunk_header(header)
            lines, header = self._read_hunk_body()
            record.hunks.append(Hunk(source, result, lines))
        return record

    def _read_extended_headers(self, record: DiffRecord) -> Optional[str]:
        """
        Record the header lines after the marker. Returns the ``--- `` line,
        or None when the file diff ends (next marker, blank line or end of
        input) before one appears.
        """
        cursor = self.cursor
        while True:
            line = cursor.next_line()
            if not line:
                return None
            if line.startswith(MARKER):
                cursor.rollback()
                return None
            if line.startswith("--- "):
                return line
            if line.startswith("new file mode"):
                record.new_file = line
            elif line.startswith("deleted file mode"):
                record.deleted_file = line
            elif line.startswith("index "):
                record.index_line = line
            else:
                for prefix, field in EXTENDED_HEADERS:
                    if line.startswith(prefix):
                        setattr(record, field, line[len(prefix):])
                        break

    def _read_hunk_body(self) -> Tuple[List[DiffLine], Optional[str]]:
        """Collect body lines; returns them with the next hunk header, if any."""
        cursor = self.cursor
        lines: List[DiffLine] = []
        while True:
            line = cursor.next_line()
            if not line:
                return lines, None
            if line.startswith(MARKER):
                cursor.rollback()
                return lines, None
            if line.startswith(HUNK_MARKER):
                return lines, line
            prefix = line[0]
            if prefix == "\\":
                # "\ No newline at end of file"
                continue
            if prefix == "+":
                kind = LineKind.ADDED
            elif prefix == "-":
                kind = LineKind.REMOVED
            else:
                kind = LineKind.CONTEXT
            lines.append(DiffLine(kind, line[1:]))


# ---- diff utilities ----------------------------------------------------------

def join(lines: List[DiffLine]) -> str:
    return "".join(f"{line.kind.value}{line.content}\n" for line in lines)


def result(lines: List[DiffLine]) -> str:
    """Content after the change: added and context lines only."""
    return "".join(f"{line.content}\n" for line in lines if line.kind is not LineKind.REMOVED)


def normalize(lines: List[DiffLine]) -> List[DiffLine]:
    """
    Tidy a hunk for display.

    A removed line directly followed by an added line with the same content is
    one unchanged line, so each such pair collapses into a context line. When
    anything collapsed and the added lines sit strictly inside the hunk, the
    first added mark is moved to the line after the last added line so the
    insertion reads as one block. The input list is left untouched.
    """
    if len(lines) < 3:
        return list(lines)

    out: List[DiffLine] = []
    collapsed = False
    for line in lines:
        prev = out[-1] if out else None
        if (
            prev is not None
            and prev.kind is LineKind.REMOVED
            and line.kind is LineKind.ADDED
            and prev.content == line.content
        ):
            out[-1] = DiffLine(LineKind.CONTEXT, line.content)
            collapsed = True
        else:
            out.append(line)
    if not collapsed:
        return out

    added = [i for i, line in enumerate(out) if line.kind is LineKind.ADDED]
    last = len(out) - 1
    if added and 0 < added[0] and added[-1] < last:
        first_add, last_add = added[0], added[-1]
        out[first_add] = DiffLine(LineKind.CONTEXT, out[first_add].content)
        out[last_add + 1] = DiffLine(LineKind.ADDED, out[last_add + 1].content)
    return out


def pick_language(filename: str) -> str:
    name = filename.rsplit("/", 1)[-1]
    ext = name.rsplit(".", 1)[-1] if "." in name else ""
    if ext in LANGUAGE_OVERRIDES:
        return LANGUAGE_OVERRIDES[ext]
    try:
        lexer = get_lexer_for_filename(name)
    except ClassNotFound:
        return ext
    return lexer.aliases[0] if lexer.aliases else ext


# ---- markdown ----------------------------------------------------------------

class MarkdownBuilder:
    def __init__(self):
        self.parts: List[str] = []

    @property
    def markdown(self) -> str:
        return "".join(self.parts)

    def append(self, obj) -> "MarkdownBuilder":
        self.parts.append(str(obj))
        return self

    def appendln(self, obj=None) -> "MarkdownBuilder":
        if obj is not None:
            self.append(obj)
        return self.append("  \n")

    def link(self, alt: str, url: str) -> "MarkdownBuilder":
        return self.append(f"[{alt}]({url}) ")

    def code_link(self, alt: str, url: str) -> "MarkdownBuilder":
        return self.append(f"[`{alt}`]({url}) ")

    def header(self, level: int, text: str) -> "MarkdownBuilder":
        return self.append("#" * level).append(" ").append(text)

    def quote(self, text: str) -> "MarkdownBuilder":
        return self.append("> ").appendln(text)

    def endsection(self) -> "MarkdownBuilder":
        return self.append("\n---\n")

    def bullet(self, level: int = 0) -> "MarkdownBuilder":
        return self.append("  " * level).append("+ ")

    def block(self, language: str) -> "CodeBlock":
        return CodeBlock(self, language)


class CodeBlock:
    def __init__(self, parent: MarkdownBuilder, language: str):
        self.parent = parent
        self.parent.append("```").appendln(language)

    def append(self, obj) -> "CodeBlock":
        self.parent.append(obj)
        return self

    def end(self) -> MarkdownBuilder:
        return self.parent.appendln("```")


# ---- steps -------------------------------------------------------------------

@dataclasses.dataclass(frozen=True)
class StepTitle:
    number: str
    title: str
    messages: List[str]

    @property
    def name(self) -> str:
        return f"{self.number} {self.title}"

    @property
    def file(self) -> str:
        slugged = re.sub(r"[?#]", "", re.sub(r"[\s./\\]", "-", self.title))
        return f"{self.number}__{slugged}.md"


@dataclasses.dataclass
class Step:
    parts: List[int]
    file: Optional[pathlib.Path] = None


def parse_step_title(message: str) -> Optional[StepTitle]:
    """Return the step of a commit message like ``[1.2] Title``, or None."""
    messages = message.split("\n")
    m = STEP_TITLE_RE.match(messages[0].strip())
    if not m:
        return None
    return StepTitle(number=m.group(1), title=m.group(2).strip(), messages=messages)


def compare_steps(a: List[int], b: List[int]) -> int:
    """Element-wise comparison; a sequence that runs out first sorts first."""
    for left, right in itertools.zip_longest(a, b):
        if left is None:
            return 0 if right is None else -1
        if right is None:
            return 1
        if left != right:
            return left - right
    return 0


_step_key = functools.cmp_to_key(compare_steps)


def list_steps(folder: pathlib.Path) -> List[Step]:
    steps: List[Step] = []
    for path in folder.iterdir():
        if not path.is_file() or path.suffix != ".md" or "__" not in path.name:
            continue
        prefix = path.name[: path.name.index("__")]
        try:
            parts = [int(p) for p in prefix.split(".")]
        except ValueError:
            continue
        steps.append(Step(parts=parts, file=path))
    steps.sort(key=lambda step: _step_key(step.parts))
    return steps


def name_from_file(file_name: str) -> str:
    number, _, rest = file_name.partition("__")
    if rest.endswith(".md"):
        rest = rest[:-3]
    return f"{number} {rest.replace('-', ' ')}"


def page_link(file_name: str) -> str:
    return file_name[:-3] if file_name.endswith(".md") else file_name


# ---- git helpers -------------------------------------------------------------

def git_log(repo_dir: str, rev: Optional[str] = None) -> GitLogParser:
    args = ["git", "--no-pager", "log", "--no-decorate"]
    args += [rev] if rev else ["--all"]
    return GitLogParser(run(args, cwd=repo_dir).stdout)


def git_show(repo_dir: str, commit: str) -> GitDiffParser:
    cp = run(["git", "--no-pager", "show", "--no-color", commit], cwd=repo_dir)
    return GitDiffParser(cp.stdout, show_mode=True)


def git_diff(repo_dir: str, commit: str, until: Optional[str] = None) -> GitDiffParser:
    args = ["git", "--no-pager", "diff", "--no-color", commit + "~"]
    if until:
        args.append(until)
    return GitDiffParser(run(args, cwd=repo_dir).stdout)


def normalize_origin(url: str) -> str:
    url = url.strip()
    if url.endswith(".git"):
        url = url[:-4]
    m = SCP_REMOTE_RE.match(url)
    if m:
        url = f"https://{m.group(1)}/{m.group(2)}"
    return url.rstrip("/")


def git_origin(repo_dir: str) -> Optional[str]:
    try:
        out = run(["git", "remote", "get-url", "origin"], cwd=repo_dir).stdout
    except subprocess.CalledProcessError:
        return None
    return normalize_origin(out) or None


# ---- pages -------------------------------------------------------------------

@dataclasses.dataclass(frozen=True)
class RenderContext:
    origin: Optional[str] = None
    mode: str = DEFAULT_MODE

    def tree_url(self, commit_hash: str, path: str = "") -> str:
        url = f"{self.origin}/tree/{commit_hash}"
        return f"{url}/{path}" if path else url

    def commit_url(self, commit_hash: str) -> str:
        return f"{self.origin}/commit/{commit_hash}"


def _strip_side(path: str) -> str:
    # "a/src/x.py" / "b/src/x.py" -> "src/x.py"
    return path[2:] if path[:2] in ("a/", "b/") else path


def render_step_page(commit: CommitRecord, step: StepTitle, diffs: List[DiffRecord],
                     ctx: RenderContext) -> str:
    """Markdown for one step; navigation markers are filled in later."""
    builder = MarkdownBuilder()
    if ctx.mode != "ghwiki":
        builder.header(1, step.name).appendln()
    builder.appendln(PREV_MARKER).endsection()

    for message in step.messages[2:]:
        builder.quote(message)

    for diff in diffs:
        if diff.deleted_file:
            builder.header(3, "Delete file `").append(_strip_side(diff.source_path)).appendln("`")
            continue
        file_name = _strip_side(diff.result_path)
        if not diff.hunks and (diff.rename_to or diff.copy_to):
            verb = "Rename" if diff.rename_to else "Copy"
            (builder.header(3, f"{verb} file `").append(_strip_side(diff.source_path))
                    .append("` to `").append(file_name).appendln("`"))
            continue
        if not diff.hunks:
            title = "Create empty file at " if diff.new_file else "Update file "
            if ctx.origin:
                builder.header(3, title).code_link(file_name, ctx.tree_url(commit.hash, file_name)).appendln()
            else:
                builder.header(3, title + "`").append(file_name).appendln("`")
            continue

        if ctx.origin:
            builder.header(3, "File: ").link(file_name, ctx.tree_url(commit.hash, file_name)).appendln()
        else:
            builder.header(3, "File: ").appendln(file_name)
        if diff.new_file:
            builder.block(pick_language(file_name)).append(result(diff.lines)).end()
        else:
            for hunk in diff.hunks:
                builder.block("diff").append(join(normalize(hunk.lines))).end()

    builder.endsection().appendln(NEXT_MARKER).endsection()

    if ctx.origin:
        (builder.append("Commit Hash : ")
                .link(commit.hash, ctx.commit_url(commit.hash))
                .link("View files", ctx.tree_url(commit.hash))
                .appendln())

    if commit.author:
        username = commit.author.split("<")[0].strip()
        (builder.endsection()
                .append("*Docs by ")
                .link(username, f"https://github.com/{username}")
                .append("* (this docs generated from ")
                .link(f"*{APP_VERSION}*", APP_URL)
                .append(")"))
    return builder.markdown


def build_navigation(folder: pathlib.Path, names: Dict[str, str]) -> str:
    """
    Fill in Previous / Next links of every step page in ``folder`` and write
    the sidebar. ``names`` maps page file names to display names; pages not in
    it get a name derived from the file name. Returns the sidebar markdown.
    """
    steps = list_steps(folder)
    nav = MarkdownBuilder()
    last_step = 1

    def neighbour(label: str, step: Optional[Step]) -> str:
        if step is None or step.file is None:
            return ""
        name = names.get(step.file.name) or name_from_file(step.file.name)
        return f"{label} : [{name}]({page_link(step.file.name)})"

    for i, step in enumerate(steps):
        prev = steps[i - 1] if i > 0 else None
        nxt = steps[i + 1] if i + 1 < len(steps) else None

        if last_step != step.parts[0]:
            nav.endsection()
        last_step = step.parts[0]

        file_name = step.file.name
        name = names.get(file_name) or name_from_file(file_name)
        nav.bullet(len(step.parts) - 1).link(name, page_link(file_name)).appendln()

        contents = step.file.read_text(encoding="utf-8")
        contents = contents.replace(PREV_MARKER, neighbour("Previous", prev), 1)
        contents = contents.replace(NEXT_MARKER, neighbour("Next", nxt), 1)
        step.file.write_text(contents, encoding="utf-8")

    (folder / SIDEBAR_FILE).write_text(nav.markdown, encoding="utf-8")
    return nav.markdown


def load_diffs(repo_dir: str, commit_hash: str, diff_parent: bool = False,
               retries: int = DEFAULT_RETRIES) -> List[DiffRecord]:
    """Fetch and parse one commit's diff, re-running git on DiffParseError."""
    attempt = 0
    while True:
        if diff_parent:
            parser = git_diff(repo_dir, commit_hash, until=commit_hash)
        else:
            parser = git_show(repo_dir, commit_hash)
        try:
            return list(parser)
        except DiffParseError as e:
            attempt += 1
            if attempt > retries:
                raise
            print(f"↻ {commit_hash[:8]}: {e.detail}, retrying ({attempt}/{retries})", file=sys.stderr)


def generate_docs(repo_dir: str, out_dir: pathlib.Path, ctx: RenderContext,
                  rev: Optional[str] = None, diff_parent: bool = False,
                  retries: int = DEFAULT_RETRIES) -> Dict[str, str]:
    """Write one page per step commit plus navigation; returns file -> name."""
    out_dir.mkdir(parents=True, exist_ok=True)
    names: Dict[str, str] = {}
    for commit in git_log(repo_dir, rev):
        step = parse_step_title(commit.message or "")
        if step is None:
            continue
        try:
            diffs = load_diffs(repo_dir, commit.hash, diff_parent=diff_parent, retries=retries)
        except (DiffParseError, subprocess.CalledProcessError) as e:
            print(f"⚠️  Skipping {commit.hash[:8]} ({step.name}): {e}", file=sys.stderr)
            continue
        page = render_step_page(commit, step, diffs, ctx)
        (out_dir / step.file).write_text(page, encoding="utf-8")
        names[step.file] = step.name
        print(f"📝 {step.name} → {step.file}", file=sys.stderr)

    if names:
        build_navigation(out_dir, names)
    return names


# ---- main --------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Render a repo's tagged commits as step-by-step markdown docs")
    ap.add_argument("repo", help="Path to a local git repository")
    ap.add_argument("--out", "-o", help="Output directory (default: <repo>/<repo-name>.wiki)")
    ap.add_argument("--mode", choices=MODES, default=DEFAULT_MODE,
                    help="ghwiki omits the page title (the wiki shows the file name); markdown adds it")
    ap.add_argument("--rev", default=None, help="Revision range for git log (default: --all)")
    ap.add_argument("--diff-parent", action="store_true",
                    help="Diff each commit against its first parent instead of using git show")
    ap.add_argument("--retries", type=int, default=DEFAULT_RETRIES,
                    help="Re-run git this many times when its diff output can't be parsed")
    ap.add_argument("--no-origin", action="store_true", help="Don't link pages to the origin remote")
    args = ap.parse_args(argv)

    repo_dir = pathlib.Path(args.repo)
    out_dir = pathlib.Path(args.out) if args.out else repo_dir / f"{repo_dir.resolve().name}.wiki"

    try:
        origin = None if args.no_origin else git_origin(str(repo_dir))
        if origin:
            print(f"🔗 Linking to {origin}", file=sys.stderr)
        ctx = RenderContext(origin=origin, mode=args.mode)

        print(f"📜 Reading history of {repo_dir}...", file=sys.stderr)
        names = generate_docs(str(repo_dir), out_dir, ctx, rev=args.rev,
                              diff_parent=args.diff_parent, retries=args.retries)
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or str(e)
        print(f"git failed: {detail}", file=sys.stderr)
        return 1

    if not names:
        print("No step commits found (expected subjects like '[1.2] Title').", file=sys.stderr)
        return 1

    print(f"💾 Wrote {len(names)} pages and {SIDEBAR_FILE} to {out_dir.resolve()}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
