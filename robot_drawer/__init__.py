"""RobotDrawer: 손그림 스트로크를 이동 명령으로 변환하여 로봇에 전송한다."""

__version__ = '0.1.0'
