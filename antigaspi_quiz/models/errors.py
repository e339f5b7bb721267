"""
models/errors.py

퀴즈 엔진 예외 계층.
프로그래밍 오류(OutOfRange, UnknownOption, QuestionKindMismatch)와
사용자에게 안내할 수 있는 복구 가능 오류를 구분한다.
"""


class QuizError(Exception):
    """퀴즈 엔진 예외의 공통 부모."""


class OutOfRangeError(QuizError, IndexError):
    """문제 인덱스가 [0, count) 범위를 벗어남."""


class UnknownOptionError(QuizError, ValueError):
    """해당 문제의 보기 목록에 없는 보기 텍스트."""


class QuestionKindMismatchError(QuizError, TypeError):
    """문제 유형과 맞지 않는 조작 (숫자 문제에 보기 선택 등)."""


class NoAnswerSelectedError(QuizError):
    """객관식 문제에서 보기를 고르지 않고 다음으로 넘어가려 함."""


class AtFirstQuestionError(QuizError):
    """첫 문제에서 이전으로 이동하려 함. 무시해도 되는 오류."""


class SessionCompletedError(QuizError):
    """이미 완료(Recap)된 세션에 대한 조작."""


class InvalidConfigurationError(QuizError, ValueError):
    """문제 은행 설정이 잘못됨. 로드 시점에 치명적."""


class ConfigurationError(QuizError):
    """
    점수 범위가 퇴화(min == max)했는데 총점이 다름.

    문제 은행 작성 오류이므로 화면에 경고로 표시하고 앱은 계속 동작한다.
    """
