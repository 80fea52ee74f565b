"""
Localized string tables.

Templates use str.format placeholders.
"""

STRINGS = {
    'en': {
        # Common
        'loading': "Loading...",
        'retry': "Retry",
        'no_data': "No Data",
        'other': "Other",

        # Schedule
        'schedule': "Schedule",
        'schedule_upcoming': "Upcoming",
        'schedule_results': "Results",
        'schedule_all': "All",
        'no_schedule': "No Matches",
        'no_schedule_message': "No matches scheduled for your selections",
        'matchday_round': "Matchday {n}",
        'home_team': "Home",
        'away_team': "Away",
        'today_matches': "Today's Matches",
        'matches': "Matches",

        # Match status
        'match_finished': "FT",
        'match_in_play': "LIVE",
        'match_paused': "HT",
        'match_extra_time': "ET",
        'match_penalty_shootout': "PEN",
        'match_scheduled': "Upcoming",
        'match_postponed': "PPD",
        'match_cancelled': "CANC",
        'match_suspended': "SUSP",

        # Positions
        'pos_goalkeeper': "GK",
        'pos_defence': "DEF",
        'pos_midfield': "MID",
        'pos_forward': "FWD",
        'pos_unknown': "N/A",

        # Standings
        'standings': "Standings",
        'standing_total': "Overall",
        'standing_home': "Home",
        'standing_away': "Away",
        'standing_group_prefix': "Group ",
        'no_standings_data': "No standings data available",
        'played': "P",
        'won': "W",
        'draw': "D",
        'lost': "L",
        'goal_diff': "GD",
        'points': "Pts",
        'form': "Form",

        # Scorers
        'top_scorers': "Top Scorers",
        'top_assists': "Top Assists",
        'no_scorers_data': "No scorer data available",
        'no_assists_data': "No assist data available",
        'player': "Player",
        'team': "Team",
        'matches_played': "Apps",
        'goals': "Goals",
        'assists': "Assists",

        # Competitions & teams
        'competitions': "Competitions",
        'teams': "Teams",
        'squad': "Squad",
        'age_years': "{age}y",
        'founded': "Founded",
        'venue': "Venue",
        'club_colors': "Colors",
        'address': "Address",
        'website': "Website",
        'head_coach': "Head Coach",
        'nationality': "Nationality",
        'date_of_birth': "Date of Birth",
        'contract_until': "Contract Until",
        'running_competitions': "Competitions",
        'shirt_number': "No.",
        'position': "Position",

        # Settings
        'selected_teams_section': "Selected Teams ({count})",
        'selected_competitions_section': "Selected Competitions ({count})",
        'team_fallback': "Team #{id}",
        'competition_fallback': "Competition #{id}",
        'remaining_slots': "{n} slots left",
        'max_selections': "Up to 10 teams and competitions",
        'no_teams_selected': "No teams selected",
        'no_competitions_selected': "No competitions selected",
        'followed': "Now following {name}",
        'already_followed': "{name} is already followed",
        'capacity_reached': "Selection limit reached. Up to 10 teams and competitions",
        'unfollowed': "Unfollowed {name}",
        'not_followed': "#{id} is not followed",
        'reset_done': "All selections reset",
        'api_key_saved': "API key saved",
        'api_key_missing': "No API key configured. Register free at football-data.org",
        'onboarding_done': "Setup complete ({n} selected)",

        # Errors
        'error_unknown': "Unexpected error: {detail}",
        'error_invalid_response': "Invalid server response",
        'error_rate_limited': "Too many requests, try again later",
        'error_unauthorized': "Invalid API key, configure in Settings",
        'error_not_found': "Resource not found",
        'error_server': "Server error ({code})",
        'error_decoding': "Data error: {detail}",
    },
    'zh': {
        'loading': "加载中...",
        'retry': "重试",
        'no_data': "暂无数据",
        'other': "其他",

        'schedule': "赛程",
        'schedule_upcoming': "未来赛程",
        'schedule_results': "已完赛",
        'schedule_all': "全部",
        'no_schedule': "暂无赛程",
        'no_schedule_message': "所选球队或赛事暂无比赛安排",
        'matchday_round': "第{n}轮",
        'home_team': "主队",
        'away_team': "客队",
        'today_matches': "今日比赛",
        'matches': "比赛",

        'match_finished': "完场",
        'match_in_play': "进行中",
        'match_paused': "中场",
        'match_extra_time': "加时",
        'match_penalty_shootout': "点球",
        'match_scheduled': "未开始",
        'match_postponed': "延期",
        'match_cancelled': "取消",
        'match_suspended': "暂停",

        'pos_goalkeeper': "门将",
        'pos_defence': "后卫",
        'pos_midfield': "中场",
        'pos_forward': "前锋",
        'pos_unknown': "未知",

        'standings': "积分榜",
        'standing_total': "总榜",
        'standing_home': "主场",
        'standing_away': "客场",
        'standing_group_prefix': "小组 ",
        'no_standings_data': "该赛事暂无积分榜数据",
        'played': "赛",
        'won': "胜",
        'draw': "平",
        'lost': "负",
        'goal_diff': "净胜",
        'points': "积分",
        'form': "近况",

        'top_scorers': "射手榜",
        'top_assists': "助攻榜",
        'no_scorers_data': "该赛事暂无射手数据",
        'no_assists_data': "该赛事暂无助攻数据",
        'player': "球员",
        'team': "球队",
        'matches_played': "场次",
        'goals': "进球",
        'assists': "助攻",

        'competitions': "赛事",
        'teams': "球队",
        'squad': "阵容",
        'age_years': "{age}岁",
        'founded': "成立年份",
        'venue': "主场",
        'club_colors': "队色",
        'address': "地址",
        'website': "官网",
        'head_coach': "主教练",
        'nationality': "国籍",
        'date_of_birth': "出生日期",
        'contract_until': "合同到期",
        'running_competitions': "参加赛事",
        'shirt_number': "号码",
        'position': "位置",

        'selected_teams_section': "已选球队 ({count})",
        'selected_competitions_section': "已选赛事 ({count})",
        'team_fallback': "球队 #{id}",
        'competition_fallback': "赛事 #{id}",
        'remaining_slots': "还可选 {n} 个",
        'max_selections': "最多可选择 10 个球队和赛事",
        'no_teams_selected': "未选择球队",
        'no_competitions_selected': "未选择赛事",
        'followed': "已关注 {name}",
        'already_followed': "{name} 已在关注列表中",
        'capacity_reached': "已达上限，最多可选择 10 个球队和赛事",
        'unfollowed': "已取消关注 {name}",
        'not_followed': "#{id} 未被关注",
        'reset_done': "已重置所有选择",
        'api_key_saved': "API Key 已保存",
        'api_key_missing': "未配置 API Key，请在 football-data.org 免费注册获取",
        'onboarding_done': "设置完成 ({n} 个已选)",

        'error_unknown': "未知错误: {detail}",
        'error_invalid_response': "无效的服务器响应",
        'error_rate_limited': "请求过于频繁，请稍后再试",
        'error_unauthorized': "API密钥无效，请在设置中配置",
        'error_not_found': "未找到请求的资源",
        'error_server': "服务器错误 ({code})",
        'error_decoding': "数据解析错误: {detail}",
    },
}

# Calendar names used by date labels, Monday first
WEEKDAYS_SHORT = {
    'en': ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    'zh': ("周一", "周二", "周三", "周四", "周五", "周六", "周日"),
}
WEEKDAYS_LONG = {
    'en': ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    'zh': ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日"),
}
MONTHS_SHORT = {
    'en': ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    'zh': ("1月", "2月", "3月", "4月", "5月", "6月", "7月", "8月", "9月", "10月", "11月", "12月"),
}

DATE_LABEL_FORMATS = {
    'en': "{weekday_short}, {month_short} {day}",
    'zh': "{month:02d}月{day:02d}日 {weekday_long}",
}
