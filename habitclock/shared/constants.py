"""Constants shared by the clock, measurement and analytics layers.

Time is analyzed by time of week, broken into 5-minute buckets:
288 buckets per day, 2016 per week. Bucket 0 is Monday 00:00-00:05,
bucket 2015 is Sunday 23:55-24:00.
"""

BUCKET_MINUTES: int = 5
MINUTES_PER_DAY: int = 1440
DAYS_PER_WEEK: int = 7
BUCKETS_PER_DAY: int = MINUTES_PER_DAY // BUCKET_MINUTES  # 288
BUCKETS_PER_WEEK: int = BUCKETS_PER_DAY * DAYS_PER_WEEK  # 2016
MIN_BUCKET_ID: int = 0
MAX_BUCKET_ID: int = BUCKETS_PER_WEEK - 1  # 2015

# Signed cyclic distance never exceeds half a week.
HALF_WEEK_BUCKETS: int = BUCKETS_PER_WEEK // 2  # 1008

MS_PER_SECOND: int = 1000
MS_PER_MINUTE: int = 60 * MS_PER_SECOND
MS_PER_HOUR: int = 60 * MS_PER_MINUTE
MS_PER_DAY: int = 24 * MS_PER_HOUR
MS_PER_BUCKET: int = BUCKET_MINUTES * MS_PER_MINUTE

# Canonical clock ordering. Dense arrays address clock blocks by this
# ordinal, so the order is part of the persisted format:
#   - habitclock.clocks.types.ClockId (enum members declared in this order)
#   - habitclock.analytics.dense_array (clock-block offsets)
CLOCK_ORDER: tuple[str, ...] = ("utc", "local", "meanSolar", "apparentSolar", "unequalHours")
NUM_CLOCKS: int = len(CLOCK_ORDER)

# Values per state group in a dense array: one week of buckets per clock (G).
VALUES_PER_GROUP: int = BUCKETS_PER_WEEK * NUM_CLOCKS  # 10080

# Sliders are continuous in the UI but always discretized into 6 states.
SLIDER_NUM_STATES: int = 6
MIN_RADIOBUTTON_STATES: int = 2
MAX_RADIOBUTTON_STATES: int = 10
