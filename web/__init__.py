"""
시뮬레이터 웹 모듈
"""
