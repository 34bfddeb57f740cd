"""文件上传服务."""
