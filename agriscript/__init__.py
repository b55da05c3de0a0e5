"""农产品直播话术工作台后端。"""

__version__ = "0.1.0"
