"""
도메인 패키지

상태를 갖지 않는 순수 계산 모듈 (날짜, 금액, 기간, 이월, Left-to-Spend, 진행 상태).
"""
