"""
后端代码根包。

定位：
- 持久化与文件读取逻辑放在 backend/src/redpill_backend 下。
- 前端只负责展示与交互（绘图、便签编辑），落盘与路径安全由后端负责。
"""
