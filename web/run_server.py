"""
웹 서버 실행 스크립트
백엔드 API 서버를 실행합니다.
"""

import uvicorn


def main():
    print("=" * 60)
    print("  MLFQ Scheduler Simulator - web server")
    print("=" * 60)
    print()
    print("API docs: http://localhost:8000/docs")
    print("Press Ctrl+C to stop.")
    print("-" * 60)

    uvicorn.run("web.backend.app:app", host="0.0.0.0", port=8000, reload=True)


if __name__ == "__main__":
    main()
