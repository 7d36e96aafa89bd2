# ═════════════════════════════════════════════════════════════════════════════════
# LOCALE INDEX TABLES
# ═════════════════════════════════════════════════════════════════════════════════
#
# Static data consumed by the bucket labeler and the collation service:
# 1. LABELS: ordered index labels per script block
# 2. FOLDING: kana, Arabic and Hangul folding applied before comparison
# 3. STROKES: Traditional Chinese stroke counts for common name characters
# 4. NAME READINGS: surnames whose name reading differs from the common one
#
# Everything is frozen at import time (tuples, frozenset, MappingProxyType).
# ═════════════════════════════════════════════════════════════════════════════════

from types import MappingProxyType

# Layer 1: LABELS

NUMBER_LABEL = "#"
EMPTY_LABEL = ""

LATIN_LABELS = tuple("ABCDEFGHIJKLMNOPQRSTUVWXYZ")

# One label per gojūon row; the label is also the row's collation boundary
KANA_ROW_LABELS = ("あ", "か", "さ", "た", "な", "は", "ま", "や", "ら", "わ")
JAPANESE_MISC_LABEL = "他"

# Leading consonants (choseong) used as index labels; double consonants fold
# into the preceding plain consonant by collation order
HANGUL_CONSONANT_LABELS = ("ᄀ", "ᄂ", "ᄃ", "ᄅ", "ᄆ", "ᄇ", "ᄉ", "ᄋ", "ᄌ", "ᄎ", "ᄏ", "ᄐ", "ᄑ", "ᄒ")

# Arabic index letters as published by the platform collator (beh is not an
# index letter and sorts into the alef bucket)
ARABIC_LABELS = tuple("اتثجحخدذرزسشصضطظعغفقكلمنهوي")

STROKE_LABEL_SUFFIX = "劃"
MAX_STROKE_LABEL = 25

# Separators a dialled or pasted phone number may start with
PHONE_SEPARATORS = frozenset(" +().-#")

# Layer 2: FOLDING

# Small kana fold to their full-size row member
SMALL_KANA_FOLDING = {
    "ぁ": "あ",
    "ぃ": "い",
    "ぅ": "う",
    "ぇ": "え",
    "ぉ": "お",
    "っ": "つ",
    "ゃ": "や",
    "ゅ": "ゆ",
    "ょ": "よ",
    "ゎ": "わ",
    "ゕ": "か",
    "ゖ": "け",
}

KATAKANA_TO_HIRAGANA_OFFSET = 0x60
KATAKANA_FOLD_RANGE = (0x30A1, 0x30F6)
KANA_VOICING_MARKS = frozenset("゙゚゛゜")

# Arabic letters that collate as another letter at primary strength
ARABIC_FOLDING = {
    "ى": "ي",  # ى alef maksura → yeh
    "ٱ": "ا",  # ٱ alef wasla → alef
}

HANGUL_SYLLABLE_BASE = 0xAC00
HANGUL_SYLLABLE_LAST = 0xD7A3
HANGUL_SYLLABLES_PER_LEAD = 588

# Compatibility jamo for every leading consonant, in choseong order; these are
# what a Korean keyboard produces when typing initials
HANGUL_COMPAT_CONSONANTS = "ㄱㄲㄴㄷㄸㄹㅁㅂㅃㅅㅆㅇㅈㅉㅊㅋㅌㅍㅎ"

# Layer 3: STROKES
# Total strokes in the Taiwan standard forms (艹 and 辶 count four strokes, 阝
# three). Characters not listed fall back to the leading catch-all bucket.

_STROKE_CHARACTERS = {
    1: "一乙",
    2: "丁七乃九了二人入八力十卜又",
    3: "三上下丈千于大女子小山川工己干弓才之也凡士寸已",
    4: "王方文尤孔毛牛元公仁天太少尹心戈支日月木水火丹井六中云今介允內分化午友夫巴引斗比片氏仇尺",
    5: "丘付代令卡古史司四左巧布平弘正母民永玉甘生田白皮石立包北半冉冬功加召台可申由甲仙必本未末禾目矛",
    6: "伍任伊向吉同后安米朱江池羊衣西全匡印年百竹舟色行有朵光先兆再列吏名合字宇守宅州帆式旭早曲次此羽老而至臣自血仲如好存牟汝",
    7: "杜李吳呂宋何余沈汪巫谷貝車辛利兵判初別君吾孝宏廷志我改更杏材村束求沙男秀私良見角言豆赤足身里佟伯佑佐作位克冷希序弟形快吟妙坊阮佘",
    8: "林周金孟岳房易武卓尚官宗宜定居屈岸幸庚明昌昆東松枝欣河法波治泳炎牧秉空長門青非季和委孤承昇果佳依來其典叔受味奇奉念忠怡放於旺服朋杰杭昊邱邵花芳芬芸阿",
    9: "姚柯洪胡施姜俞段紀韋侯柳查秋泉春昭星映柏思政信保俊冠勇南品威宣帝律拜持故是柔洋津玲珍皇相眉美耐虹貞軍音風飛香首宥奕彥恆范茂英凃郁",
    10: "徐孫高袁馬唐夏殷秦翁耿桂凌倪原家宮容師庭書校桃海浩真素純航訓財軒晉晏時桐桑格泰烈珠班留益展峰恩流涂茹",
    11: "張許梁曹章崔康常麥婉梅淑清理雪國培堂崇偉啟敏曼望梓涵紹習商基彬彩惟授晨淳陳郭莊陸陶莫連粘莉",
    12: "黃曾程彭馮傅游湯童賀焦舒項雲順欽勝博喜富寒惠然琪琳登發皓智晴景朝森棋棠湘雄雅貴開裕辜華萍菁進逸隆陽",
    13: "楊詹賈雷溫廉新楚靖慈愛意暉會楷源瑞聖群詩資鈴雍瑜葉董鄒萬葛達道運",
    14: "趙廖熊齊管裴翟榮碧維綺豪赫輔銘鳳嘉壽寧榕睿碩綠聞蓉遠",
    15: "劉歐潘黎樊魯衛儀慧慶德樂毅瑩瑾緯誼賢輝鋒震養霆蔡鄭鄧蔣蓮",
    16: "錢盧霍龍鮑燕穆諸賴駱閻穎澤曉樺橋錦靜親",
    17: "謝鍾韓戴應鞠繆檀聯聰謙鴻嶺優彌蕭薛薇",
    18: "顏魏簡聶豐儲歸鎮雙璧鵑藍闕",
    19: "羅譚關龐懷瀚麗鏡韻願",
    20: "嚴鐘寶競耀馨籍蘇",
    21: "顧饒鶴櫻露鐵",
    22: "龔權歡聽",
    23: "欒顯變",
    24: "靈讓鷹",
    25: "觀灣",
}


# Layer 4: NAME READINGS
# Characters read differently as a name than in running text. Every reading is
# a lookup candidate; the first one is the name reading and drives pinyin
# collation. All other characters use the single reading pypinyin picks.

NAME_HETERONYMS = {
    "曾": ("ZENG", "CENG"),
    "单": ("SHAN", "DAN"),
    "單": ("SHAN", "DAN"),
    "解": ("XIE", "JIE"),
    "区": ("OU", "QU"),
    "區": ("OU", "QU"),
    "仇": ("QIU", "CHOU"),
    "朴": ("PIAO", "PU"),
    "查": ("ZHA", "CHA"),
    "盖": ("GE", "GAI"),
    "蓋": ("GE", "GAI"),
    "乐": ("YUE", "LE"),
    "樂": ("YUE", "LE"),
    "尉": ("YU", "WEI"),
    "覃": ("QIN", "TAN"),
    "缪": ("MIAO", "MOU"),
    "繆": ("MIAO", "MOU"),
    "长": ("CHANG", "ZHANG"),
    "長": ("CHANG", "ZHANG"),
    "翟": ("ZHAI", "DI"),
    "沈": ("SHEN", "CHEN"),
    "秘": ("BI", "MI"),
    "重": ("CHONG", "ZHONG"),
}


def _build_stroke_counts(table):
    counts = {}
    for strokes, characters in table.items():
        for char in characters:
            if char in counts:
                raise ValueError(f"Duplicate stroke entry for '{char}': {counts[char]} and {strokes}")
            counts[char] = strokes
    return counts


# Create immutable versions

SMALL_KANA_FOLDING = MappingProxyType(SMALL_KANA_FOLDING)
ARABIC_FOLDING = MappingProxyType(ARABIC_FOLDING)
STROKE_COUNTS = MappingProxyType(_build_stroke_counts(_STROKE_CHARACTERS))
NAME_HETERONYMS = MappingProxyType(NAME_HETERONYMS)

# One representative per stroke count; any character with that count compares
# equal at primary strength, so the first entry of each row serves as boundary
STROKE_BOUNDARIES = tuple(_STROKE_CHARACTERS[strokes][0] for strokes in range(1, MAX_STROKE_LABEL + 1))
