from flask import Flask, request, jsonify
from tour import BASE, MARGIN, ConfigurationError, InvalidTourError, TourSolver, validate_tour

app = Flask(__name__)
app.config.update(
    TOUR_SIZE=BASE,
    TOUR_MARGIN=MARGIN,
    TOUR_MAX_SIZE=40, # 请求允许的最大棋盘边长，不限制搜索时间
)
app.config.from_prefixed_env()


def fail(message, status=400):
    return jsonify({
        'success': False,
        'message': message
    }), status


@app.route('/api/solve', methods=['POST'])
def solve(): # 从起点搜索完整的马步路径
    if not request.get_data():
        data = {} # 空请求体使用默认配置
    else:
        data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return fail('请求体必须是JSON对象')

    size = data.get('size', app.config['TOUR_SIZE'])
    margin = data.get('margin', app.config['TOUR_MARGIN'])
    start = data.get('start')
    if isinstance(size, int) and size > app.config['TOUR_MAX_SIZE']:
        return fail(f'棋盘边长不能超过{app.config["TOUR_MAX_SIZE"]}')

    try:
        solver = TourSolver(size, margin, start=start)
    except (ConfigurationError, TypeError) as e:
        app.logger.info('rejected solve request: %s', e)
        return fail(str(e))

    success = solver.solve_iterative() if data.get('iterative') else solver.solve()
    result = {
        'success': success,
        'start': list(solver.start),
        'total': solver.total,
        'grid': solver.grid,
        'path': [list(cell) for cell in solver.path()] if success else []
    }
    if not success:
        result['message'] = 'no result'
    return jsonify(result)


@app.route('/api/check', methods=['POST'])
def check(): # 检查提交的棋盘是否为完整合法的路径
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'grid' not in data:
        return fail('缺少棋盘数据')

    try:
        path = validate_tour(data['grid'])
    except InvalidTourError as e:
        return jsonify({
            'success': False,
            'message': str(e)
        })

    return jsonify({
        'success': True,
        'message': f'共{len(path)}步, 路径合法'
    })


if __name__ == '__main__':
    app.run(debug=True, port=5000)
