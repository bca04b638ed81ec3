"""
설정, 데이터 로드, 후보 조합 생성 유틸리티
"""
