"""
RedPill Charting 本地持久化后端。

定位：
- 给桌面前端提供少量命令：读 CSV、保存/读取图表绘图状态、保存/读取便签。
- 所有数据落在 `<app_data>/RedPillCharting/Database` 下，以 JSON 文件保存。
"""

__version__ = "0.1.0"
