"""고정 결과 권한 확인기.

데스크톱 BLE 스택(BlueZ, CoreBluetooth, WinRT)과 MQTT 백엔드는
런타임 권한 요청이 없으므로 설정된 결과를 그대로 반환한다.
"""

import logging

from robot_drawer.usecase.ports.link_adapter import PermissionChecker

logger = logging.getLogger(__name__)


class StaticPermissionChecker(PermissionChecker):
    """PermissionChecker의 고정 결과 구현체.

    Args:
        granted: 권한 허용 여부.
    """

    def __init__(self, granted: bool = True) -> None:
        self._granted = granted

    async def request(self) -> bool:
        if not self._granted:
            logger.warning('Link permissions are not granted')
        return self._granted
