import logging
import random
import sys

logger = logging.getLogger(__name__)

BASE = 12 # 参考棋盘边长
MARGIN = 2 # 四周封锁边框宽度
BLOCKED = -1

# 八种跳法 (d_row, d_col)，顺序决定同分候选的先后
MOVES = (
    (-2, 1), (-1, 2), (1, 2), (2, 1),
    (2, -1), (1, -2), (-1, -2), (-2, -1)
)


class ConfigurationError(ValueError):
    pass


class InvalidTourError(ValueError):
    pass


# 带封锁边框棋盘上的马踏棋盘回溯求解: 候选按 Warnsdorff 规则排序，出现孤立空格即剪枝
# 棋盘原地修改，搜索失败后只保留起点的 1
class TourSolver:
    def __init__(self, size=BASE, margin=MARGIN, start=None, rng=None):
        if not isinstance(size, int) or not isinstance(margin, int):
            raise ConfigurationError('棋盘边长和边框宽度必须是整数')
        if margin < 0:
            raise ConfigurationError(f'边框宽度不能为负数: {margin}')
        if size - 2 * margin <= 0:
            raise ConfigurationError(f'{size}x{size}棋盘在边框{margin}下没有空格')

        self.size = size
        self.margin = margin
        self.grid = [
            [BLOCKED if self._in_border(r, c) else 0 for c in range(size)]
            for r in range(size)
        ]
        self.total = sum(1 for row in self.grid for v in row if v != BLOCKED) # 需要填满的格数

        if start is None:
            start = (rng or random).choice(self.free_cells())
        else:
            start = tuple(start)
            if len(start) != 2 or not all(isinstance(v, int) for v in start) \
                    or not self.within_board_check(*start) \
                    or self.grid[start[0]][start[1]] == BLOCKED:
                raise ConfigurationError(f'起点{start}不是空格')
        self.start = start
        self.grid[start[0]][start[1]] = 1

        self.calls = 0 # 进入搜索的次数
        self.pruned = 0 # 孤立格剪枝次数
        self.solved = None
        logger.debug('grid %dx%d margin %d: %d free cells, start %s',
                     size, size, margin, self.total, start)

    def _in_border(self, r, c):
        m = self.margin
        return r < m or r > self.size - m - 1 or c < m or c > self.size - m - 1

    def within_board_check(self, r, c):
        return 0 <= r < self.size and 0 <= c < self.size

    def free_cells(self):
        return [(r, c) for r in range(self.size) for c in range(self.size)
                if self.grid[r][c] == 0]

    def is_free(self, r, c):
        return self.within_board_check(r, c) and self.grid[r][c] == 0

    def count_neighbors(self, r, c): # 后续可走格数
        return sum(1 for dr, dc in MOVES if self.is_free(r + dr, c + dc))

    def neighbors(self, r, c): # (row, col, 后续可走格数)
        found = []
        for dr, dc in MOVES:
            nr, nc = r + dr, c + dc
            if self.is_free(nr, nc):
                found.append((nr, nc, self.count_neighbors(nr, nc)))
        return found

    def ordered_neighbors(self, r, c):
        return sorted(self.neighbors(r, c), key=lambda x: x[-1]) # 稳定排序

    def orphan_detected(self, count, r, c):
        if count < self.total - 1: # 只剩最后一格时不会产生孤立格
            for nr, nc, _ in self.neighbors(r, c):
                if self.count_neighbors(nr, nc) == 0:
                    return True
        return False

    def attempt_solve(self, row, col, count): # DFS
        self.calls += 1
        if count > self.total:
            return True

        candidates = self.neighbors(row, col)
        if not candidates and count != self.total:
            return False

        for r, c, _ in sorted(candidates, key=lambda x: x[-1]):
            self.grid[r][c] = count
            if self.orphan_detected(count, r, c):
                self.pruned += 1
            elif self.attempt_solve(r, c, count + 1):
                return True
            self.grid[r][c] = 0

        return False

    def solve(self):
        # 每一步占一层递归，叶子处另有约十层辅助调用
        if stack_depth() + self.total + 50 > sys.getrecursionlimit():
            logger.debug('%d free cells exceed the recursion limit, searching with an explicit stack',
                         self.total)
            return self.solve_iterative()
        self.solved = self.attempt_solve(self.start[0], self.start[1], 2)
        self._log_outcome()
        return self.solved

    def solve_iterative(self): # 与 solve() 搜索顺序相同，栈帧为 [count, 排好序的候选, 下一个候选下标]
        self.calls += 1
        if 2 > self.total:
            self.solved = True
            self._log_outcome()
            return True

        stack = [[2, self.ordered_neighbors(*self.start), 0]]
        while stack:
            frame = stack[-1]
            count, candidates, index = frame
            if index > 0: # 上一个落子失败，撤销
                r, c, _ = candidates[index - 1]
                self.grid[r][c] = 0
            if index == len(candidates):
                stack.pop()
                continue

            frame[2] += 1
            r, c, _ = candidates[index]
            self.grid[r][c] = count
            if self.orphan_detected(count, r, c):
                self.pruned += 1
                continue

            self.calls += 1
            if count + 1 > self.total:
                self.solved = True
                self._log_outcome()
                return True
            stack.append([count + 1, self.ordered_neighbors(r, c), 0])

        self.solved = False
        self._log_outcome()
        return False

    def _log_outcome(self):
        if self.solved:
            logger.info('tour from %s found after %d steps (%d pruned)',
                        self.start, self.calls, self.pruned)
        else:
            logger.info('no tour from %s after %d steps (%d pruned)',
                        self.start, self.calls, self.pruned)

    def path(self):
        return tour_path(self.grid)


def stack_depth():
    frame, depth = sys._getframe(1), 0
    while frame is not None:
        frame, depth = frame.f_back, depth + 1
    return depth


def format_grid(grid): # 封锁格不输出
    lines = []
    for row in grid:
        lines.append(''.join(f'{v:2d} ' for v in row if v != BLOCKED))
    return '\n'.join(lines) + '\n'


def print_result(grid, file=None):
    print(format_grid(grid), end='', file=file or sys.stdout)


def tour_path(grid): # 按步数排列的格子
    numbered = [(v, (r, c)) for r, row in enumerate(grid)
                for c, v in enumerate(row) if v > 0]
    return [cell for _, cell in sorted(numbered)]


def validate_tour(grid): # 每个空格恰好填入 1..N 各一次且相邻步数为马步，合法时返回路径
    if not isinstance(grid, list) or not grid \
            or any(not isinstance(row, list) or len(row) != len(grid) for row in grid):
        raise InvalidTourError('棋盘必须是非空方阵')
    if any(not isinstance(v, int) for row in grid for v in row):
        raise InvalidTourError('棋盘格必须是整数')

    free = [(r, c) for r, row in enumerate(grid)
            for c, v in enumerate(row) if v != BLOCKED]
    values = sorted(grid[r][c] for r, c in free)
    if values != list(range(1, len(free) + 1)):
        raise InvalidTourError(f'空格必须恰好填入1..{len(free)}各一次')

    path = tour_path(grid)
    for step, ((r1, c1), (r2, c2)) in enumerate(zip(path, path[1:]), 1):
        if (r2 - r1, c2 - c1) not in MOVES:
            raise InvalidTourError(f'第{step}步到第{step + 1}步不是马步')
    return path
