#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MLFQ 스케줄러 시뮬레이터 - 명령줄 실행 진입점
"""

import argparse
import os
import sys

from pydantic import ValidationError

from core.config import SimulationConfig
from core.random_source import SystemRandomSource
from schedulers.feedback_scheduler import FeedbackScheduler
from utils.input_parser import InputParser
from utils.visualization import Visualizer


# 명령줄 옵션 -> 설정 필드
OPTION_FIELDS = {
    'population': 'population_size',
    'quantum': 'quantum',
    'cpu_min': 'cpu_min',
    'cpu_max': 'cpu_max',
    'io_chance': 'io_chance_pct',
    'seed': 'seed',
}


def print_banner():
    """배너 출력"""
    print("\n" + "="*80)
    print(" "*20 + "MLFQ Scheduler Simulator (CPU + I/O devices)")
    print("="*80 + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Discrete-event simulation of a two-level feedback queue scheduler "
                    "with disk, tape and printer devices.")
    parser.add_argument('--config', metavar='FILE', help="key = value configuration file")
    parser.add_argument('--population', type=int, help="number of processes (default 8)")
    parser.add_argument('--quantum', type=int, help="CPU ticks per dispatch (default 3)")
    parser.add_argument('--cpu-min', type=int, help="minimum CPU demand (default 8)")
    parser.add_argument('--cpu-max', type=int, help="maximum CPU demand (default 25)")
    parser.add_argument('--io-chance', type=int, help="I/O request chance per tick in percent (default 25)")
    parser.add_argument('--seed', type=int, help="random seed, 0 = time-based (default 0)")
    parser.add_argument('--runs', type=int, default=1, help="number of runs with consecutive seeds")
    parser.add_argument('--output-dir', default="simulation_results", help="where results are saved")
    parser.add_argument('--no-charts', action='store_true', help="do not draw charts")
    parser.add_argument('--quiet', action='store_true', help="do not print the transcript")
    return parser


def load_config(args) -> SimulationConfig:
    """
    설정 파일과 명령줄 옵션 병합

    Raises:
        ValidationError: 잘못된 설정
        FileNotFoundError: 설정 파일을 읽을 수 없음
    """
    options = {}
    if args.config:
        parsed = InputParser.parse_config_file(args.config)
        if parsed is None:
            raise FileNotFoundError(args.config)
        options.update(parsed)

    for option, field_name in OPTION_FIELDS.items():
        value = getattr(args, option)
        if value is not None:
            options[field_name] = value

    return SimulationConfig(**options)


def run_simulations(config: SimulationConfig, runs: int = 1, verbose: bool = True):
    """연속된 시드로 시뮬레이션을 `runs`번 실행"""
    results = []
    base_seed = config.seed or SystemRandomSource().seed

    for i in range(runs):
        run_config = config.model_copy(update={'seed': base_seed + i})

        scheduler = FeedbackScheduler(run_config)
        if runs > 1:
            print(f"[{i + 1}/{runs}] seed {scheduler.seed}")
        result = scheduler.run(verbose=verbose)
        results.append(result)

    return results


def save_results(results, output_dir="simulation_results", charts=True):
    """결과 저장"""
    os.makedirs(output_dir, exist_ok=True)

    visualizer = Visualizer()

    print("\n" + "="*80)
    print("Results")
    print("="*80 + "\n")
    visualizer.print_statistics_table(results)
    for result in results:
        visualizer.print_process_details(result)

    if charts:
        print("Drawing Gantt charts...")
        for result in results:
            save_path = os.path.join(output_dir, f"gantt_seed_{result['seed']}.png")
            visualizer.draw_gantt_chart(result['gantt_chart'], f"MLFQ (seed {result['seed']})",
                                        save_path=save_path, show=False)

        if len(results) > 1:
            comparison_path = os.path.join(output_dir, "comparison.png")
            visualizer.compare_runs(results, save_path=comparison_path, show=False)

    save_results_to_file(results, os.path.join(output_dir, "results.txt"))
    save_transcripts(results, os.path.join(output_dir, "transcript.txt"))

    print(f"\n{'='*80}")
    print(f"Results saved to '{output_dir}/'")
    print(f"{'='*80}\n")


def save_results_to_file(results, filename):
    """통계와 프로세스별 결과를 텍스트 파일로 저장"""
    with open(filename, 'w', encoding='utf-8') as f:
        f.write("="*100 + "\n")
        f.write("MLFQ scheduler simulation results\n")
        f.write("="*100 + "\n\n")

        f.write(f"{'Seed':<14} {'Final t':>9} {'Avg wait':>12} {'Avg turnaround':>16} "
                f"{'Avg response':>14} {'CPU util(%)':>13} {'Ctx switches':>14}\n")
        f.write("-"*100 + "\n")
        for result in results:
            stats = result['statistics']
            f.write(f"{str(result['seed']):<14} "
                    f"{stats['final_clock']:>9} "
                    f"{stats['avg_waiting_time']:>12.2f} "
                    f"{stats['avg_turnaround_time']:>16.2f} "
                    f"{stats['avg_response_time']:>14.2f} "
                    f"{stats['cpu_utilization']:>13.2f} "
                    f"{stats['context_switches']:>14}\n")
        f.write("\n")

        for result in results:
            f.write("="*100 + "\n")
            f.write(f"Seed: {result['seed']}\n")
            f.write("-"*100 + "\n")
            f.write(f"{'PID':<6} {'PPID':>6} {'CPU':>6} {'I/O':>6} {'First run':>10} "
                    f"{'Finish':>8} {'Waiting':>8} {'Dispatches':>11}\n")
            for process in result['processes']:
                parent = process.parent_pid if process.parent_pid is not None else '-'
                f.write(f"{process.pid:<6} {parent:>6} {process.cpu_total:>6} "
                        f"{process.io_time:>6} {process.first_run_time:>10} "
                        f"{process.finish_time:>8} {process.waiting_time:>8} "
                        f"{process.dispatch_count:>11}\n")
            f.write("\n")

    print(f"Results written to {filename}")


def save_transcripts(results, filename):
    """모든 실행의 이벤트 기록 저장"""
    with open(filename, 'w', encoding='utf-8') as f:
        for result in results:
            f.write(f"# seed {result['seed']}\n")
            for line in result['event_log']:
                f.write(line + "\n")
            f.write("\n")


def main(argv=None) -> int:
    """메인 함수"""
    args = build_parser().parse_args(argv)

    if args.runs < 1:
        print("[Error] --runs must be at least 1")
        return 1

    print_banner()

    try:
        config = load_config(args)
    except FileNotFoundError:
        return 1
    except ValidationError as e:
        print(f"[Error] Invalid configuration:\n{e}")
        return 1

    InputParser.print_config_summary(config)

    results = run_simulations(config, runs=args.runs, verbose=not args.quiet)

    for result in results:
        InputParser.print_process_summary(result['processes'])

    save_results(results, args.output_dir, charts=not args.no_charts)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nSimulation interrupted by user.")
        print("="*80 + "\n")
        sys.exit(0)
    except Exception as e:
        print(f"\n\n[Error] Unexpected error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
