"""
basic_budget 백엔드 패키지

단일 사용자 예산 관리 코어: 기간/예산/거래/알림/CSV 서비스와 순수 도메인 계산.
"""

__version__ = "0.1.0"
