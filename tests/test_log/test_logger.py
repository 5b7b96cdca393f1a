"""日志工具测试"""

import logging

from ympath.config import LoggingSettings
from ympath.log import (
    LoggingConfigProtocol,
    MicrosecondFormatter,
    create_formatter,
    get_logger,
    setup_logger,
    setup_root_logger,
)


class TestGetLogger:
    """get_logger 测试"""

    def test_infer_module_name(self):
        assert get_logger().name == __name__

    def test_short_name_prefixed(self):
        assert get_logger("tree").name == "ympath.tree"

    def test_full_names_kept(self):
        assert get_logger("ympath.store").name == "ympath.store"
        assert get_logger("ympath").name == "ympath"
        assert get_logger("sqlalchemy.engine").name == "sqlalchemy.engine"

    def test_engine_modules_use_package_names(self):
        from ympath.tree import mover
        assert mover.logger.name == "ympath.tree.mover"

    def test_public_names(self):
        """测试模块只导出配置函数和包级日志器"""
        import ympath.log
        assert ympath.log.logger.name == "ympath"
        assert sorted(ympath.log.__all__) == sorted([
            "setup_logger", "setup_root_logger", "create_formatter", "MicrosecondFormatter",
            "LoggingConfigProtocol", "DEFAULT_LOG_FORMAT", "logger", "get_logger",
        ])


class TestFormatter:
    """格式化器测试"""

    def test_microseconds(self):
        formatter = create_formatter("%(asctime)s %(message)s")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
        record.created = 1700000000.123456

        output = formatter.format(record)

        assert isinstance(formatter, MicrosecondFormatter)
        assert ".123456" in output or ".123455" in output
        assert output.endswith("hello")

    def test_plain_formatter(self):
        formatter = create_formatter(use_microseconds=False)
        assert not isinstance(formatter, MicrosecondFormatter)


class TestSetupLogger:
    """setup_logger 测试"""

    def test_level_and_console(self, restore_logger):
        name = restore_logger("ympath.test.console")

        log = setup_logger(name, level="DEBUG")

        assert log.level == logging.DEBUG
        assert len(log.handlers) == 1
        assert isinstance(log.handlers[0], logging.StreamHandler)

    def test_file_handler(self, tmp_path, restore_logger):
        name = restore_logger("ympath.test.file")
        log_file = tmp_path / "logs" / "tree.log"

        log = setup_logger(name, level="INFO", log_file=str(log_file), console=False)
        log.info("移动节点")
        for handler in log.handlers:
            handler.flush()

        assert log_file.exists()
        assert "移动节点" in log_file.read_text(encoding="utf-8")

    def test_handlers_replaced(self, restore_logger):
        name = restore_logger("ympath.test.repeat")

        setup_logger(name)
        log = setup_logger(name)

        assert len(log.handlers) == 1

    def test_root_logger_from_settings(self, tmp_path, restore_logger):
        restore_logger(None)
        config = LoggingSettings(level="WARNING", file_path=str(tmp_path / "root.log"), enable_console=False)

        root = setup_root_logger(config=config)

        assert root is logging.getLogger()
        assert root.level == logging.WARNING
        assert [type(h) for h in root.handlers] == [logging.FileHandler]

    def test_root_logger_from_protocol_object(self, restore_logger):
        """测试任意满足 LoggingConfigProtocol 的对象都可以作为配置"""
        restore_logger(None)

        class PlainConfig:
            level = "ERROR"
            file_path = ""
            enable_console = True

        config = PlainConfig()
        assert isinstance(config, LoggingConfigProtocol)

        root = setup_root_logger(config=config)

        assert root.level == logging.ERROR
        assert [type(h) for h in root.handlers] == [logging.StreamHandler]
