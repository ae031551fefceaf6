"""
Kubernetes 客户端 - 基于 kubectl

就绪检查用到的三类操作：
1. 按标签列出控制面拥有的工作负载 (Deployment/StatefulSet/DaemonSet)
2. 读取 ServiceMeshControlPlane 实例
3. 写回 status 子资源、创建 Event
"""

import json
import subprocess
from typing import Any, Dict, List, Optional


CONTROL_PLANE_RESOURCE = "servicemeshcontrolplanes.maistra.io"


def format_selector(labels: Optional[Dict[str, str]]) -> str:
    """将标签字典转为 kubectl -l 参数，按键排序保证命令稳定"""
    if not labels:
        return ""
    return ",".join(f"{key}={value}" for key, value in sorted(labels.items()))


class KubectlWrapper:
    """kubectl 封装

    所有方法返回 {"success": bool, "data": any, "error": str}，
    由调用方决定失败时如何处理。读取结果不做缓存，每轮检查都看到最新状态。
    """

    def __init__(self, context: Optional[str] = None):
        """
        Args:
            context: kubeconfig context (默认使用 current-context)
        """
        self.context = context
        self.kubectl_cmd = self._build_kubectl_cmd()

    def _build_kubectl_cmd(self) -> List[str]:
        """构建 kubectl 命令前缀"""
        cmd = ["kubectl"]
        if self.context:
            cmd.extend(["--context", self.context])
        return cmd

    async def run(
        self,
        cmd: List[str],
        timeout: int = 10,
        input_data: Optional[str] = None
    ) -> Dict:
        """
        执行命令并解析结果

        Args:
            cmd: 命令列表
            timeout: 超时时间（秒）
            input_data: 通过 stdin 传入的内容 (用于 -f -)

        Returns:
            {"success": bool, "data": any, "error": str}
        """
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                input=input_data
            )

            if result.returncode != 0:
                return {
                    "success": False,
                    "error": result.stderr.strip(),
                    "cmd": " ".join(cmd)
                }

            # 尝试解析 JSON
            try:
                data = json.loads(result.stdout)
                return {"success": True, "data": data}
            except json.JSONDecodeError:
                # 不是 JSON，返回原始文本
                return {"success": True, "data": result.stdout.strip()}

        except subprocess.TimeoutExpired:
            return {
                "success": False,
                "error": f"Command timed out after {timeout}s",
                "cmd": " ".join(cmd)
            }
        except OSError as e:
            return {
                "success": False,
                "error": str(e),
                "cmd": " ".join(cmd)
            }

    # === 工作负载读取 ===

    async def list_resources(
        self,
        resource: str,
        namespace: str,
        labels: Optional[Dict[str, str]] = None
    ) -> Dict:
        """
        按标签列出某个命名空间下的资源

        Args:
            resource: kubectl 资源名 (如 deployments.apps)
            namespace: 命名空间
            labels: 必须全部匹配的标签

        Returns:
            {
                "success": True/False,
                "data": {"items": [...]},
                "error": str (如果失败)
            }
        """
        cmd = self.kubectl_cmd + ["get", resource, "-n", namespace]

        selector = format_selector(labels)
        if selector:
            cmd.extend(["-l", selector])

        cmd.extend(["-o", "json"])
        return await self.run(cmd, timeout=15)

    # === 控制面实例 ===

    async def get_control_plane(
        self,
        name: str,
        namespace: str,
        resource: str = CONTROL_PLANE_RESOURCE
    ) -> Dict:
        """获取 ServiceMeshControlPlane 实例"""
        cmd = self.kubectl_cmd + [
            "get", resource, name,
            "-n", namespace,
            "-o", "json"
        ]
        return await self.run(cmd, timeout=10)

    async def patch_status(
        self,
        resource: str,
        name: str,
        namespace: str,
        status: Dict[str, Any]
    ) -> Dict:
        """
        写回 status 子资源

        使用 merge patch，conditions 列表整体替换，
        对调用方而言是一次原子写入。
        """
        patch = json.dumps({"status": status})
        cmd = self.kubectl_cmd + [
            "patch", resource, name,
            "-n", namespace,
            "--subresource=status",
            "--type=merge",
            "-p", patch,
            "-o", "json"
        ]
        return await self.run(cmd, timeout=10)

    async def create_resource(self, manifest: Dict[str, Any]) -> Dict:
        """通过 stdin 创建资源 (kubectl create -f -)"""
        cmd = self.kubectl_cmd + ["create", "-f", "-", "-o", "json"]
        return await self.run(cmd, timeout=10, input_data=json.dumps(manifest))

