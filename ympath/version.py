"""版本信息"""

__version__ = "0.1.0"
__author__ = "ympath"
__description__ = "物化路径树形结构引擎"
