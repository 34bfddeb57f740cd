"""数据模型模块.

主要模型:
- User: 后台用户(角色 + 分区权限)
- Project: 项目作品
- WorkType: 工种/服务类别
- Statistic: 首页统计数字
- KnowledgeEntry: 智能助手知识库条目
- CompanyData: 公司信息(单行)
- ContactMessage: 联系表单留言
"""

__all__ = [
    "CompanyData",
    "ContactMessage",
    "KnowledgeEntry",
    "Project",
    "Statistic",
    "User",
    "WorkType",
]


def __getattr__(name: str):
    """延迟加载模型, 避免初始化周期引发的循环导入."""
    if name not in __all__:
        msg = f"module 'sergas.models' has no attribute {name}"
        raise AttributeError(msg)

    from importlib import import_module

    module_map = {
        "CompanyData": "sergas.models.company_data",
        "ContactMessage": "sergas.models.contact_message",
        "KnowledgeEntry": "sergas.models.knowledge_entry",
        "Project": "sergas.models.project",
        "Statistic": "sergas.models.statistic",
        "User": "sergas.models.user",
        "WorkType": "sergas.models.work_type",
    }

    module = import_module(module_map[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
