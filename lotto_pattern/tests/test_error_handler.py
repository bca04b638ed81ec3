"""
로깅 유틸리티 테스트 모듈
"""

import logging
import shutil
import tempfile
import unittest
import sys
from pathlib import Path

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = str(Path(__file__).parent.parent.parent)
if project_root not in sys.path:
    sys.path.append(project_root)

from shared.error_handler import log_performance, setup_logger


@log_performance
def _divide(a, b):
    return a / b


class TestErrorHandler(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_setup_logger_once(self):
        log_file = Path(self.temp_dir) / 'logs' / 'lotto.log'
        logger = setup_logger('lotto_pattern.test_setup', log_file)
        handler_count = len(logger.handlers)
        self.assertEqual(handler_count, 2)

        same = setup_logger('lotto_pattern.test_setup', log_file)
        self.assertIs(same, logger)
        self.assertEqual(len(same.handlers), handler_count)

        logger.debug("파일 기록 테스트")
        for handler in logger.handlers:
            handler.flush()
            handler.close()
        self.assertIn("파일 기록 테스트", log_file.read_text(encoding='utf-8'))

    def test_package_logger_configured(self):
        import lotto_pattern
        package_logger = logging.getLogger('lotto_pattern')
        self.assertIs(lotto_pattern.logger, package_logger)
        self.assertTrue(package_logger.handlers)
        # 하위 모듈 로거는 패키지 로거로 전파
        child = logging.getLogger('lotto_pattern.src.analysis.reliability')
        self.assertTrue(child.propagate)
        self.assertIs(child.parent, package_logger)

    def test_log_performance(self):
        self.assertEqual(_divide(6, 3), 2)
        with self.assertLogs(__name__, level=logging.ERROR):
            with self.assertRaises(ZeroDivisionError):
                _divide(1, 0)


if __name__ == '__main__':
    unittest.main()
