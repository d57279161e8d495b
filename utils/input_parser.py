"""
설정 파일 파서 및 요약 출력
"""

from typing import Dict, List, Optional

from core.config import SimulationConfig
from core.process import Process


class InputParser:
    """설정 파일 파서"""

    @staticmethod
    def parse_config_file(filename: str) -> Optional[Dict[str, int]]:
        """
        텍스트 파일에서 시뮬레이션 옵션 읽기

        파일 형식: 한 줄에 `key = value` 하나, '#' 뒤는 주석
        예: quantum = 3

        Args:
            filename: 입력 파일 경로

        Returns:
            옵션 딕셔너리 (아직 검증 전), 파일을 읽을 수 없으면 None
        """
        known = set(SimulationConfig.model_fields)
        options: Dict[str, int] = {}

        try:
            with open(filename, 'r', encoding='utf-8') as f:
                for line in f:
                    line = line.split('#', 1)[0].strip()

                    if not line:
                        continue

                    try:
                        key, value = InputParser._parse_line(line)
                    except ValueError as e:
                        print(f"Warning: skipping line: {line}")
                        print(f"Error: {e}")
                        continue

                    if key not in known:
                        print(f"Warning: unknown option '{key}' ignored")
                        continue
                    options[key] = value

            print(f"Loaded {len(options)} option(s) from {filename}")
            return options

        except FileNotFoundError:
            print(f"Error: file '{filename}' not found")
            return None
        except OSError as e:
            print(f"Error reading file: {e}")
            return None

    @staticmethod
    def _parse_line(line: str):
        """`key = value` 분리 (`key: value`도 허용)"""
        for separator in ('=', ':'):
            if separator in line:
                key, value = line.split(separator, 1)
                break
        else:
            raise ValueError("expected 'key = value'")

        key = key.strip().lower().replace('-', '_')
        if not key:
            raise ValueError("empty option name")
        try:
            return key, int(value.strip())
        except ValueError:
            raise ValueError(f"'{value.strip()}' is not an integer")

    @staticmethod
    def save_config_to_file(config: SimulationConfig, filename: str):
        """
        설정을 파일로 저장

        Args:
            config: 저장할 설정
            filename: 출력 파일 경로
        """
        with open(filename, 'w', encoding='utf-8') as f:
            f.write("# MLFQ simulator configuration\n")
            f.write("# Format: key = value\n\n")
            for key, value in config.model_dump().items():
                f.write(f"{key} = {value}\n")

        print(f"Configuration saved to {filename}")

    @staticmethod
    def print_config_summary(config: SimulationConfig):
        """시뮬레이션 옵션 출력"""
        print("\n" + "="*80)
        print("Configuration")
        print("="*80)
        print(f"  Processes        : {config.population_size}")
        print(f"  Quantum          : {config.quantum}")
        print(f"  CPU demand       : [{config.cpu_min}, {config.cpu_max}]")
        print(f"  I/O chance       : {config.io_chance_pct}%")
        print(f"  Disk duration    : [{config.disk_min}, {config.disk_max}]")
        print(f"  Tape duration    : [{config.tape_min}, {config.tape_max}]")
        print(f"  Printer duration : [{config.printer_min}, {config.printer_max}]")
        seed = config.seed if config.seed else "time-based"
        print(f"  Seed             : {seed}")
        print("="*80 + "\n")

    @staticmethod
    def print_process_summary(processes: List[Process]):
        """생성된 프로세스 출력"""
        print("\n" + "="*60)
        print("Process summary")
        print("="*60)
        print(f"{'PID':<6} {'PPID':>6} {'CPU':>8} {'Dispatches':>12} {'I/O reqs':>10}")
        print("-"*60)

        for p in sorted(processes, key=lambda x: x.pid):
            parent = p.parent_pid if p.parent_pid is not None else '-'
            print(f"{p.pid:<6} {parent:>6} {p.cpu_total:>8} {p.dispatch_count:>12} {p.io_requests:>10}")

        print("="*60)
        print(f"Total processes: {len(processes)}, "
              f"total CPU demand: {sum(p.cpu_total for p in processes)}\n")
