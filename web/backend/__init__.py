"""
FastAPI 백엔드
"""
