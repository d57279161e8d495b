"""
MLFQ 스케줄러 시뮬레이터 - FastAPI 백엔드
"""

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError
from typing import List, Optional, Dict, Any
import asyncio

from core.config import SimulationConfig
from core.random_source import SystemRandomSource
from schedulers import FeedbackScheduler

app = FastAPI(
    title="MLFQ Scheduler Simulator",
    description="Multilevel feedback queue CPU scheduler with simulated I/O devices",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Pydantic 모델
class CompareRequest(BaseModel):
    config: SimulationConfig = Field(default_factory=SimulationConfig)
    runs: int = Field(3, ge=1, le=50)


class GanttEntry(BaseModel):
    pid: int
    start_time: int
    end_time: int
    state: str


class ProcessResult(BaseModel):
    pid: int
    parent_pid: Optional[int]
    cpu_total: int
    io_time: int
    first_run_time: Optional[int]
    finish_time: Optional[int]
    waiting_time: Optional[int]
    dispatch_count: int
    io_requests: int


class SimulationResult(BaseModel):
    algorithm: str
    seed: Optional[int]
    final_clock: int
    gantt_chart: List[GanttEntry]
    processes: List[ProcessResult]
    statistics: Dict[str, float]
    event_log: List[str]


def serialize_result(result: Dict) -> Dict:
    """스케줄러 결과를 JSON 형식으로 변환"""
    gantt_chart = [
        {
            'pid': entry.pid,
            'start_time': entry.start_time,
            'end_time': entry.end_time,
            'state': entry.state.value
        }
        for entry in result['gantt_chart']
    ]

    processes = [
        {
            'pid': p.pid,
            'parent_pid': p.parent_pid,
            'cpu_total': p.cpu_total,
            'io_time': p.io_time,
            'first_run_time': p.first_run_time,
            'finish_time': p.finish_time,
            'waiting_time': p.waiting_time,
            'dispatch_count': p.dispatch_count,
            'io_requests': p.io_requests
        }
        for p in result['processes']
    ]

    return {
        'algorithm': result['algorithm'],
        'seed': result['seed'],
        'final_clock': result['final_clock'],
        'gantt_chart': gantt_chart,
        'processes': processes,
        'statistics': result['statistics'],
        'event_log': result['event_log']
    }


def run_scheduler(config: SimulationConfig) -> Dict:
    """시뮬레이션 1회 실행 후 직렬화된 결과 반환"""
    scheduler = FeedbackScheduler(config)
    return serialize_result(scheduler.run())


@app.get("/")
async def root():
    return {"message": "MLFQ Scheduler Simulator API", "version": "1.0.0"}


@app.get("/config/defaults")
async def get_default_config():
    """기본 시뮬레이션 옵션"""
    return SimulationConfig().model_dump()


@app.post("/simulate", response_model=SimulationResult)
async def simulate(config: SimulationConfig):
    """시뮬레이션 1회 실행"""
    return run_scheduler(config)


@app.post("/simulate/compare")
async def compare_runs(request: CompareRequest):
    """같은 설정을 연속된 시드로 여러 번 실행"""
    base_seed = request.config.seed or SystemRandomSource().seed
    results = []
    comparison = {
        'seeds': [],
        'final_clock': [],
        'avg_waiting_time': [],
        'avg_turnaround_time': [],
        'cpu_utilization': [],
        'context_switches': []
    }

    for i in range(request.runs):
        config = request.config.model_copy(update={'seed': base_seed + i})
        result = run_scheduler(config)
        results.append(result)

        stats = result['statistics']
        comparison['seeds'].append(result['seed'])
        comparison['final_clock'].append(result['final_clock'])
        comparison['avg_waiting_time'].append(stats['avg_waiting_time'])
        comparison['avg_turnaround_time'].append(stats['avg_turnaround_time'])
        comparison['cpu_utilization'].append(stats['cpu_utilization'])
        comparison['context_switches'].append(stats['context_switches'])

    return {
        "success": True,
        "results": results,
        "comparison": comparison
    }


# WebSocket 실시간 시뮬레이션
class RealtimeSimulator:
    def __init__(self, config: SimulationConfig):
        self.scheduler = FeedbackScheduler(config)
        self.is_complete = False
        self.last_event_index = 0

    def step(self) -> Dict[str, Any]:
        """스케줄러 한 단계 실행 후 변경 내용 반환"""
        if self.is_complete:
            return {'complete': True}

        is_complete = self.scheduler.step()

        events = self.scheduler.events
        new_logs = [e.describe() for e in events[self.last_event_index:]]
        self.last_event_index = len(events)

        snapshot = self.scheduler.get_current_snapshot()
        result = {
            'complete': is_complete,
            'new_logs': new_logs,
            'snapshot': snapshot
        }

        if is_complete:
            self.is_complete = True
            final = self.scheduler.run()
            result['new_logs'] += final['event_log'][self.last_event_index:]
            result['final'] = final['statistics']

        return result


@app.websocket("/ws/realtime")
async def websocket_realtime(websocket: WebSocket):
    """실시간 시뮬레이션 WebSocket 엔드포인트"""
    await websocket.accept()
    simulator = None

    try:
        while True:
            message = await websocket.receive_json()
            action = message.get('action')

            if action == 'init':
                try:
                    config = SimulationConfig(**message.get('config', {}))
                except ValidationError as e:
                    await websocket.send_json({'type': 'error', 'message': str(e)})
                    continue

                simulator = RealtimeSimulator(config)
                await websocket.send_json({
                    'type': 'initialized',
                    'seed': simulator.scheduler.seed,
                    'process_count': config.population_size
                })

            elif simulator is None:
                await websocket.send_json({'type': 'error', 'message': "Simulator not initialized"})

            elif action == 'step':
                await websocket.send_json({'type': 'step_result', **simulator.step()})

            elif action == 'run':
                speed = message.get('speed', 10.0)
                if not isinstance(speed, (int, float)) or isinstance(speed, bool) or speed <= 0:
                    await websocket.send_json({'type': 'error', 'message': f"Invalid speed: {speed}"})
                    continue
                delay = 1.0 / speed

                while not simulator.is_complete:
                    result = simulator.step()
                    await websocket.send_json({'type': 'step_result', **result})
                    if result['complete']:
                        break
                    await asyncio.sleep(delay)

            else:
                await websocket.send_json({'type': 'error', 'message': f"Unknown action: {action}"})

    except WebSocketDisconnect:
        pass
    except Exception as e:
        await websocket.send_json({'type': 'error', 'message': str(e)})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
