"""系统常量: 错误分类、严重度与对外文案.

对外文案面向站点管理端(西语用户),日志与注释保持中文.
"""

from enum import Enum


class ErrorCategory(Enum):
    """错误分类."""

    VALIDATION = "validation"
    BUSINESS = "business"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    EXTERNAL = "external"
    NETWORK = "network"
    SYSTEM = "system"


class ErrorSeverity(Enum):
    """错误严重度."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorMessages:
    """错误消息常量."""

    # 通用
    INTERNAL_ERROR = "Error interno del servidor"
    VALIDATION_ERROR = "Datos inválidos"
    INVALID_ARGUMENT = "Argumento inválido"
    PERMISSION_DENIED = "Permiso denegado"
    PERMISSION_REQUIRED = "Se requiere permiso sobre {permission}"
    ADMIN_PERMISSION_REQUIRED = "Se requiere rol de administrador"
    RESOURCE_NOT_FOUND = "Recurso no encontrado"
    INVALID_REQUEST = "Solicitud inválida"
    AUTHENTICATION_REQUIRED = "Debe iniciar sesión"
    CONSTRAINT_VIOLATION = "Conflicto con datos existentes"

    # 认证
    INVALID_CREDENTIALS = "Email o contraseña incorrectos"
    ACCOUNT_DISABLED = "Usuario deshabilitado"

    # 数据库
    DATABASE_QUERY_ERROR = "Error de base de datos"
    DATABASE_TIMEOUT = "La operación de base de datos excedió el tiempo límite"
    REORDER_FAILED = "No se pudo guardar el nuevo orden"

    # 文件
    FILE_REQUIRED = "Debe adjuntar un archivo"
    INVALID_FILE_TYPE = "Tipo de archivo no permitido"
    FILE_UPLOAD_ERROR = "Error al subir el archivo"


class SuccessMessages:
    """成功消息常量."""

    OPERATION_SUCCESS = "OK"
    DATA_SAVED = "Datos guardados"
    DATA_DELETED = "Datos eliminados"
    DATA_UPDATED = "Datos actualizados"
    ORDER_SAVED = "Orden actualizado"
    LOGIN_SUCCESS = "Sesión iniciada"
    MESSAGE_RECEIVED = "Mensaje guardado"
    FILE_UPLOADED = "Archivo subido"
