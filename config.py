import os

# 기본 디렉토리 설정
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# 경로 설정
LOG_FILE = os.path.join(BASE_DIR, "launch.log")
APP_DIR = os.path.join(BASE_DIR, "antigaspi_quiz")
QUESTION_BANK_FILE = os.getenv(
    "QUIZ_BANK_FILE", os.path.join(APP_DIR, "data", "quiz.json")
)
STREAMLIT_APP_FILE = os.path.join(APP_DIR, "streamlit_app.py")

# 서버 설정
DEFAULT_HOST = os.getenv("HOST", "127.0.0.1")
DEFAULT_PORT = int(os.getenv("PORT", "8000"))
DEFAULT_TIMEOUT = 15.0
SESSION_TTL = int(os.getenv("QUIZ_SESSION_TTL", "3600"))  # 1시간

# 실행 모드: "streamlit" (기본 UI) 또는 "api" (JSON API 서버)
UI_MODE = os.getenv("QUIZ_UI_MODE", "streamlit")

# 테마 설정 (anti_gaspi / eco)
DEFAULT_THEME = os.getenv("QUIZ_THEME", "anti_gaspi")

# 채점 설정
HIGH_TIER_THRESHOLD = 80        # 이 이상이면 High 등급
MEDIUM_TIER_THRESHOLD = 50      # 이 이상이면 Medium 등급
UNANSWERED_FALLBACK_SCORE = 4   # 빈 숫자 응답 + 기본 점수/구간 점수 없음
