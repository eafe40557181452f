"""RobotDrawer 도메인 레이어.

외부 의존성 없이 값 객체, 엔티티, 이벤트, 경로 변환 알고리즘을 정의한다.
"""
