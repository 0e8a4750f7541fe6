"""
音色库（sound bank）与定义文件：把多个 Sound 组织成按 slot 编号的资源。
"""
