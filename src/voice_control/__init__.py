"""语音命令解析结果的设备解析与执行。"""
