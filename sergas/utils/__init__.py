"""SERGAS 工具模块."""
