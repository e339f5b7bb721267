"""
main.py — 안티갸스피 퀴즈 앱 진입점

QUIZ_UI_MODE=streamlit (기본) : Streamlit 화면 실행
QUIZ_UI_MODE=api              : FastAPI JSON 서버 실행 후 브라우저로 /docs 열기
"""

import os
import socket
import subprocess
import sys
import time
import threading
import logging
import traceback
import webbrowser

# ── 패키지 경로 설정 (반드시 최상단) ──────────────────────────────────────────
_BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if _BASE_DIR not in sys.path:
    sys.path.insert(0, _BASE_DIR)

from config import BASE_DIR, LOG_FILE, DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT, STREAMLIT_APP_FILE, UI_MODE

# ── 로깅 설정 ────────────────────────────────────────────────────────────────
try:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(LOG_FILE, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )
except PermissionError:
    # 로그 파일 점유 시 콘솔 출력만 사용
    logging.basicConfig(level=logging.INFO)

logger = logging.getLogger(__name__)

# ── 서버 및 네트워크 유틸 ───────────────────────────────────────────────────

def _port_available(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind((DEFAULT_HOST, port))
        except OSError:
            return False
        return True

def _find_free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((DEFAULT_HOST, 0))
        return s.getsockname()[1]

def _wait_for_server(port: int, timeout: float = DEFAULT_TIMEOUT) -> bool:
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            with socket.create_connection((DEFAULT_HOST, port), timeout=0.5):
                return True
        except OSError:
            time.sleep(0.1)
    return False

def _start_server(port: int) -> None:
    try:
        import uvicorn
        from api.app import create_app
        logger.info(f"Uvicorn 서버 시작 - Port: {port}")
        app = create_app()
        uvicorn.run(app, host=DEFAULT_HOST, port=port, log_level="warning")
    except Exception:
        logger.error(f"서버 오류 발생:\n{traceback.format_exc()}")

def _run_api() -> int:
    port = DEFAULT_PORT if _port_available(DEFAULT_PORT) else _find_free_port()
    server_thread = threading.Thread(target=_start_server, args=(port,), daemon=True)
    server_thread.start()

    if not _wait_for_server(port):
        logger.error("서버 시작 제한 시간을 초과했습니다. 문제 은행 파일과 로그를 확인하세요.")
        return 1

    logger.info("서버 준비 완료. 브라우저를 엽니다.")
    webbrowser.open(f"http://{DEFAULT_HOST}:{port}/docs")

    # 메인 스레드 유지
    try:
        while server_thread.is_alive():
            time.sleep(10)
    except KeyboardInterrupt:
        logger.info("사용자에 의해 종료되었습니다.")
    return 0

def _run_streamlit() -> int:
    cmd = [sys.executable, "-m", "streamlit", "run", STREAMLIT_APP_FILE,
           "--server.address", DEFAULT_HOST]
    logger.info(f"Streamlit 실행: {' '.join(cmd)}")
    try:
        return subprocess.call(cmd, cwd=BASE_DIR)
    except KeyboardInterrupt:
        logger.info("사용자에 의해 종료되었습니다.")
        return 0

# ── 메인 실행 ────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    logger.info(f"=== Quiz Anti-Gaspi Started (mode: {UI_MODE}) ===")
    os.chdir(BASE_DIR)

    if UI_MODE == "api":
        sys.exit(_run_api())
    elif UI_MODE == "streamlit":
        sys.exit(_run_streamlit())
    else:
        logger.error(f"알 수 없는 실행 모드입니다: {UI_MODE} (streamlit / api)")
        sys.exit(2)
