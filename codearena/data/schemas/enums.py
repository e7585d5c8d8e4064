from enum import Enum


class Verdict(str, Enum):
    """Local classification of a submission's outcome."""

    PENDING = "Pending"
    ACCEPTED = "Accepted"
    WRONG_ANSWER = "Wrong Answer"
    TIME_LIMIT_EXCEEDED = "Time Limit Exceeded"
    COMPILATION_ERROR = "Compilation Error"
    RUNTIME_ERROR = "Runtime Error"
    INTERNAL_ERROR = "Internal Error"

    @property
    def is_terminal(self) -> bool:
        return self is not Verdict.PENDING


class Language(str, Enum):
    CPP = "cpp"
    C = "c"
    PYTHON = "python"
    JAVA = "java"
    JAVASCRIPT = "javascript"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
