"""通用工具: 结构化日志配置与请求编解码."""
