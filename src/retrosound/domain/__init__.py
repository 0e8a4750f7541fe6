"""
音轨领域逻辑：类型、记谱解析、文本块编解码、Sound 记录。
"""
