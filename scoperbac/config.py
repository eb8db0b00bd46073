# scoperbac/config.py
import os

# 데이터베이스 연결 문자열. 환경 변수가 없으면 로컬 SQLite 파일을 사용합니다.
DATABASE_URL = os.environ.get("SCOPERBAC_DATABASE_URL", "sqlite:///scoperbac.db")

# SQL 로그 출력 여부 ("1", "true", "yes" 이면 활성화)
SQL_ECHO = os.environ.get("SCOPERBAC_SQL_ECHO", "").lower() in ("1", "true", "yes")
