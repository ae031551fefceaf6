#!/usr/bin/env python3
"""
服务网格控制面就绪检查工具

- 单次模式: 执行一轮检查，输出 Ready 条件
- --watch: 作为外层控制循环周期性执行，出错时指数退避重试
"""

import asyncio
import json
import logging
import sys
from typing import Optional, Tuple

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from mesh_readiness_checker.collectors.k8s_client import KubectlWrapper
from mesh_readiness_checker.config import ReadinessSettings, load_settings
from mesh_readiness_checker.reconciler import ReadinessReconciler
from mesh_readiness_checker.status.conditions import ConditionStatus, ConditionType
from mesh_readiness_checker.status.events import KubectlEventRecorder
from mesh_readiness_checker.status.instance import ControlPlaneInstance
from mesh_readiness_checker.utils.errors import ReadinessError, ReadinessErrorCode
from mesh_readiness_checker.utils.retry import retry_on_reconcile_error


console = Console()

STATUS_STYLES = {
    ConditionStatus.TRUE: ("green", "✅"),
    ConditionStatus.FALSE: ("red", "❌"),
    ConditionStatus.UNKNOWN: ("yellow", "⚠️ "),
}


def setup_logging(verbose: bool = False):
    """日志输出到同一个 rich console"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


async def load_instance(
    client: KubectlWrapper,
    name: str,
    namespace: str
) -> ControlPlaneInstance:
    """读取 ServiceMeshControlPlane"""
    result = await client.get_control_plane(name, namespace)
    if not result.get("success") or not isinstance(result.get("data"), dict):
        raise ReadinessError(
            f"无法获取控制面实例: {result.get('error', 'Unknown error')}",
            ReadinessErrorCode.RESOURCE_NOT_FOUND,
            {"name": name, "namespace": namespace}
        )
    return ControlPlaneInstance.from_kube(result["data"])


async def check_readiness(
    client: KubectlWrapper,
    name: str,
    namespace: str,
    settings: ReadinessSettings
) -> Tuple[ControlPlaneInstance, Optional[ReadinessError]]:
    """
    执行一轮就绪检查

    Returns:
        (实例, 本轮抛出的错误或 None)

    Raises:
        ReadinessError: 实例本身无法读取
    """
    instance = await load_instance(client, name, namespace)
    reconciler = ReadinessReconciler(
        client=client,
        recorder=KubectlEventRecorder(client),
        instance=instance,
        settings=settings,
    )

    try:
        await reconciler.update_readiness()
    except ReadinessError as e:
        return instance, e
    return instance, None


def print_readiness(
    instance: ControlPlaneInstance,
    error: Optional[ReadinessError] = None,
    output: str = "text"
):
    """打印 Ready 条件"""
    condition = instance.status.get_condition(ConditionType.READY.value)

    if output in ("yaml", "json"):
        report = {
            "name": instance.name,
            "namespace": instance.namespace,
            "condition": condition.to_kube(),
        }
        if error is not None:
            report["error"] = error.to_dict()
        if output == "yaml":
            console.print(
                yaml.safe_dump(report, sort_keys=False, allow_unicode=True),
                end="", markup=False, highlight=False, emoji=False, soft_wrap=True
            )
        else:
            console.print(
                json.dumps(report, indent=2, ensure_ascii=False),
                markup=False, highlight=False, emoji=False, soft_wrap=True
            )
        return

    color, icon = STATUS_STYLES.get(condition.status, ("white", "•"))
    title = f"{instance.namespace}/{instance.name}"

    lines = [f"[bold {color}]{icon} Ready: {condition.status.value}[/bold {color}]"]
    if condition.reason:
        lines.append(f"[bold]原因:[/bold] {escape(condition.reason)}")
    if condition.message:
        lines.append(f"[bold]信息:[/bold] {escape(condition.message)}")
    if condition.last_transition_time:
        lines.append(f"[dim]最后变化: {condition.last_transition_time.isoformat()}[/dim]")

    console.print(Panel("\n".join(lines), title=title, expand=False))

    if error is not None:
        console.print(f"[red]❌ {escape(str(error))}[/red]")


async def watch(
    client: KubectlWrapper,
    name: str,
    namespace: str,
    settings: ReadinessSettings,
    output: str = "text"
):
    """周期性执行就绪检查，直到被中断"""

    @retry_on_reconcile_error()
    async def run_pass():
        instance, error = await check_readiness(client, name, namespace, settings)
        print_readiness(instance, error, output)
        if error is not None:
            raise error

    while True:
        try:
            await run_pass()
        except ReadinessError as e:
            console.print(f"[yellow]⚠️  重试后仍失败，等待下一轮: {escape(str(e))}[/yellow]")
        await asyncio.sleep(settings.watch_interval)


async def main_async(args) -> int:
    """异步主函数"""
    try:
        settings = load_settings(
            config_file=args.config,
            cni_enabled=args.cni,
            operator_namespace=args.operator_namespace,
            skip_status_update=args.skip_status_update,
            kube_context=args.context,
            watch_interval=args.interval,
        )
    except ReadinessError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        return 1

    client = KubectlWrapper(context=settings.kube_context)

    if args.watch:
        await watch(client, args.name, args.namespace, settings, args.output)
        return 0

    try:
        instance, error = await check_readiness(client, args.name, args.namespace, settings)
    except ReadinessError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        return 1

    print_readiness(instance, error, args.output)
    return 0 if error is None else 1


def build_parser():
    """命令行参数定义

    布尔开关未指定时为 None，交给环境变量和配置文件决定
    """
    import argparse

    parser = argparse.ArgumentParser(
        prog="mesh-readiness-checker",
        description="服务网格控制面就绪检查工具",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  %(prog)s basic -n istio-system
  %(prog)s basic -n istio-system --cni --operator-namespace openshift-operators
  %(prog)s basic -n istio-system --watch --interval 15
        """
    )

    parser.add_argument("name", help="ServiceMeshControlPlane 名称")
    parser.add_argument("-n", "--namespace", required=True, help="控制面所在命名空间")
    parser.add_argument(
        "--cni", action=argparse.BooleanOptionalAction, default=None,
        help="是否同时检查 CNI DaemonSet"
    )
    parser.add_argument("--operator-namespace", help="operator 所在命名空间 (CNI 位置)")
    parser.add_argument(
        "--skip-status-update", action=argparse.BooleanOptionalAction, default=None,
        help="只检查，不写回 status"
    )
    parser.add_argument("--config", help="YAML 配置文件")
    parser.add_argument("--context", help="kubeconfig context")
    parser.add_argument("--watch", action="store_true", help="周期性执行检查")
    parser.add_argument("--interval", type=float, help="--watch 间隔 (秒)")
    parser.add_argument(
        "-o", "--output",
        choices=["text", "yaml", "json"],
        default="text",
        help="输出格式"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    return parser


def main():
    """CLI 主入口"""
    args = build_parser().parse_args()
    setup_logging(args.verbose)

    try:
        exit_code = asyncio.run(main_async(args))
        sys.exit(exit_code)
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  用户中断[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
