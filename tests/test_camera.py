import io

from launchmon import logger
from launchmon.camera import init_camera
from launchmon.logger import LogLevel


def test_init_camera_logs_initialization():
    buffer = io.StringIO()
    logger.init(buffer)
    logger.set_log_level(LogLevel.DEBUG)
    try:
        init_camera()
    finally:
        logger.init()
    output = buffer.getvalue()
    assert "[INFO]" in output
    assert "Camera initialized." in output