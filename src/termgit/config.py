"""termgit 配置

配置分为以下几类：
- Hook 配置：hook 路径（相对仓库根目录）
- 日志配置
- 指标配置
"""

import os

# === Hook 配置 ===
HOOK_COMMIT_MSG = ".git/hooks/commit-msg"  # commit-msg hook 路径
HOOK_POST_COMMIT = ".git/hooks/post-commit"  # post-commit hook 路径
HOOK_MSG_FILE_PREFIX = "termgit_commit_msg_"  # commit-msg 临时文件前缀

# === Git 配置 ===
GIT_EXECUTABLE = os.environ.get("TERMGIT_GIT", "git")  # git 可执行文件
GIT_TIMEOUT_SECONDS = 30  # git 命令超时（秒），不作用于 hook

# === UI 配置 ===
WORKDIR_TITLE = "Status [1]"  # 工作区面板标题
STAGE_TITLE = "Index [2]"  # 暂存区面板标题
COMMIT_TITLE = "Commit"  # 提交对话框标题
COMMIT_MSG_PLACEHOLDER = "type commit message.."  # 空消息提示
MSG_TITLE = "Info"  # 消息弹窗标题
RESET_TITLE = "Reset"  # 重置确认弹窗标题

# === 日志配置 ===
LOG_LEVEL = os.environ.get("TERMGIT_LOG_LEVEL", "INFO")  # 日志级别
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_MAX_DIAGNOSTIC_LEN = 200  # hook 诊断输出日志截断长度

# === 指标配置 ===
METRICS_ENABLED = True  # 是否启用指标收集
