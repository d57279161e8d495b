"""
시각화 모듈: 간트 차트 및 실행 비교 그래프
"""

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from typing import List, Dict
from core.scheduler_base import GanttEntry, IDLE_PID
from core.process import ProcessState


class Visualizer:
    """스케줄링 결과 시각화"""

    def __init__(self):
        # 프로세스별 색상
        self.colors = plt.cm.Set3.colors
        self.idle_color = '#CCCCCC'
        self.blocked_color = '#FFE5E5'

    def draw_gantt_chart(self, gantt_data: List[GanttEntry], title: str,
                         save_path: str = None, show: bool = True):
        """
        간트 차트 그리기

        Args:
            gantt_data: 간트 차트 항목
            title: 차트 제목
            save_path: 저장 경로 (None이면 저장하지 않음)
            show: 화면 표시 여부
        """
        if not gantt_data:
            print(f"No Gantt chart data for {title}")
            return

        fig, ax = plt.subplots(figsize=(16, 6))

        unique_pids = sorted(set(entry.pid for entry in gantt_data if entry.pid != IDLE_PID))
        pid_to_y = {pid: idx for idx, pid in enumerate(unique_pids)}
        idle_row = len(unique_pids)

        for entry in gantt_data:
            duration = entry.end_time - entry.start_time

            if entry.pid == IDLE_PID:
                ax.barh(idle_row, duration, left=entry.start_time, height=0.8,
                        color=self.idle_color, edgecolor='black', linewidth=0.5)
                continue

            y_pos = pid_to_y[entry.pid]

            if entry.state == ProcessState.RUNNING:
                color = self.colors[entry.pid % len(self.colors)]
                alpha = 1.0
            else:
                color = self.blocked_color
                alpha = 0.7

            ax.barh(y_pos, duration, left=entry.start_time, height=0.8,
                    color=color, alpha=alpha, edgecolor='black', linewidth=0.5)

            if duration > 1:
                ax.text(entry.start_time + duration/2, y_pos, f'P{entry.pid}',
                        ha='center', va='center', fontsize=8, fontweight='bold')

        ax.set_yticks(range(len(unique_pids) + 1))
        ax.set_yticklabels([f'P{pid}' for pid in unique_pids] + ['Idle'])
        ax.set_xlabel('Time', fontsize=12)
        ax.set_ylabel('Process', fontsize=12)
        ax.set_title(f'Gantt Chart - {title}', fontsize=14, fontweight='bold')
        ax.grid(axis='x', alpha=0.3)

        legend_elements = [
            mpatches.Patch(color=self.colors[0], label='Running'),
            mpatches.Patch(color=self.blocked_color, alpha=0.7, label='I/O (Blocked)'),
            mpatches.Patch(color=self.idle_color, label='CPU idle')
        ]
        ax.legend(handles=legend_elements, loc='upper right')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Gantt chart saved to {save_path}")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def compare_runs(self, results: List[Dict], save_path: str = None, show: bool = True):
        """
        여러 실행 결과 비교 (서로 다른 시드)

        Args:
            results: 결과 딕셔너리 목록
            save_path: 저장 경로
            show: 화면 표시 여부
        """
        if not results:
            print("No results to compare")
            return

        labels = [f"seed {r['seed']}" for r in results]
        panels = [
            ('final_clock', 'Completion Time', 'skyblue', '{:.0f}'),
            ('avg_waiting_time', 'Average Waiting Time', 'lightcoral', '{:.2f}'),
            ('avg_turnaround_time', 'Average Turnaround Time', 'lightgreen', '{:.2f}'),
            ('cpu_utilization', 'CPU Utilization (%)', 'plum', '{:.1f}%'),
        ]

        fig, axes = plt.subplots(2, 2, figsize=(16, 12))
        fig.suptitle('MLFQ Runs Comparison', fontsize=16, fontweight='bold')

        for ax, (key, label, color, fmt) in zip(axes.flat, panels):
            values = [r['statistics'][key] for r in results]
            bars = ax.bar(range(len(labels)), values, color=color, edgecolor='black')
            ax.set_xticks(range(len(labels)))
            ax.set_xticklabels(labels, rotation=45, ha='right', fontsize=9)
            ax.set_ylabel(label, fontsize=11)
            ax.set_title(label, fontsize=12, fontweight='bold')
            ax.grid(axis='y', alpha=0.3)
            if key == 'cpu_utilization':
                ax.set_ylim(0, 100)

            for bar, value in zip(bars, values):
                ax.text(bar.get_x() + bar.get_width()/2., bar.get_height(),
                        fmt.format(value), ha='center', va='bottom', fontsize=9)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Comparison chart saved to {save_path}")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def print_statistics_table(self, results: List[Dict]):
        """
        통계를 표 형태로 출력

        Args:
            results: 결과 딕셔너리 목록
        """
        print("\n" + "="*110)
        print("MLFQ run statistics")
        print("="*110)
        print(f"{'Seed':<14} {'Final t':>9} {'Avg wait':>12} {'Avg turnaround':>16} "
              f"{'Avg response':>14} {'CPU util(%)':>13} {'Ctx switches':>14}")
        print("-"*110)

        for result in results:
            stats = result['statistics']
            print(f"{str(result['seed']):<14} "
                  f"{stats['final_clock']:>9} "
                  f"{stats['avg_waiting_time']:>12.2f} "
                  f"{stats['avg_turnaround_time']:>16.2f} "
                  f"{stats['avg_response_time']:>14.2f} "
                  f"{stats['cpu_utilization']:>13.2f} "
                  f"{stats['context_switches']:>14}")

        print("="*110 + "\n")

    def print_process_details(self, result: Dict):
        """
        한 번의 실행에 대한 프로세스별 상세 정보

        Args:
            result: 실행 결과
        """
        print(f"\n{'='*90}")
        print(f"Process details - seed {result['seed']}")
        print(f"{'='*90}")
        print(f"{'PID':<6} {'CPU':>6} {'I/O':>6} {'First run':>10} {'Finish':>8} "
              f"{'Waiting':>8} {'Turnaround':>11} {'Dispatches':>11} {'I/O reqs':>9}")
        print(f"{'-'*90}")

        for process in result['processes']:
            print(f"{process.pid:<6} "
                  f"{process.cpu_total:>6} "
                  f"{process.io_time:>6} "
                  f"{process.first_run_time:>10} "
                  f"{process.finish_time:>8} "
                  f"{process.waiting_time:>8} "
                  f"{process.turnaround_time:>11} "
                  f"{process.dispatch_count:>11} "
                  f"{process.io_requests:>9}")

        print(f"{'='*90}\n")
