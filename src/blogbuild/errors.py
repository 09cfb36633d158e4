"""Error taxonomy: every fatal condition a compile or build can hit"""


class BlogBuildError(Exception):
    """Base error. Renders as '[ERROR] <message>' plus optional context."""

    message = "blog builder error"

    def __init__(self, context: object = None) -> None:
        self.context = context
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.context is None:
            return f"[ERROR] {self.message}"
        return f"[ERROR] {self.message}: {self.context}"


# --- environment ---

class CannotGetWorkingDirectory(BlogBuildError):
    message = "cannot get working directory"


# --- lexical ---

class UnrecognizedToken(BlogBuildError):
    message = "unrecognized token"


# --- grammar ---

class UnrecognizedControlSequence(BlogBuildError):
    message = "unrecognized control sequence"


class TooManyHashes(BlogBuildError):
    message = "too many hashes"


class UnexpectedEof(BlogBuildError):
    message = "unexpected end of file"


class ExpectedTokenOfClass(BlogBuildError):
    message = "expected token of class"


# --- I/O ---

class CannotFindFile(BlogBuildError):
    message = "cannot find file"


class CannotReadFile(BlogBuildError):
    message = "cannot read file"


class CannotOpenFile(BlogBuildError):
    message = "cannot open file"


class CannotWriteFile(BlogBuildError):
    message = "cannot write to file"


class CannotExtractFileStem(BlogBuildError):
    message = "cannot extract file stem"


class CannotReadDir(BlogBuildError):
    message = "cannot read input directory"
