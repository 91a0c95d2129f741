from dataclasses import dataclass


@dataclass(frozen=True)
class Country:
    name: str
    code: str


def _pool(*pairs: tuple[str, str]) -> list[Country]:
    return [Country(name=name, code=code) for code, name in pairs]


EUROPEAN_COUNTRIES = _pool(
    ("al", "Albania"), ("de", "Alemania"), ("ad", "Andorra"), ("am", "Armenia"), ("at", "Austria"),
    ("az", "Azerbaiyán"), ("be", "Bélgica"), ("by", "Bielorrusia"), ("ba", "Bosnia y Herzegovina"),
    ("bg", "Bulgaria"), ("cy", "Chipre"), ("hr", "Croacia"), ("dk", "Dinamarca"), ("sk", "Eslovaquia"),
    ("si", "Eslovenia"), ("es", "España"), ("ee", "Estonia"), ("fi", "Finlandia"), ("fr", "Francia"),
    ("ge", "Georgia"), ("gr", "Grecia"), ("hu", "Hungría"), ("ie", "Irlanda"), ("is", "Islandia"),
    ("it", "Italia"), ("xk", "Kosovo"), ("lv", "Letonia"), ("li", "Liechtenstein"), ("lt", "Lituania"),
    ("lu", "Luxemburgo"), ("mk", "Macedonia del Norte"), ("mt", "Malta"), ("md", "Moldavia"),
    ("mc", "Mónaco"), ("me", "Montenegro"), ("no", "Noruega"), ("nl", "Países Bajos"), ("pl", "Polonia"),
    ("pt", "Portugal"), ("gb", "Reino Unido"), ("cz", "República Checa"), ("ro", "Rumanía"),
    ("ru", "Rusia"), ("sm", "San Marino"), ("rs", "Serbia"), ("se", "Suecia"), ("ch", "Suiza"),
    ("tr", "Turquía"), ("ua", "Ucrania"), ("va", "Vaticano"),
)

ASIAN_COUNTRIES = _pool(
    ("af", "Afganistán"), ("sa", "Arabia Saudita"), ("bd", "Bangladés"), ("bh", "Baréin"), ("bt", "Bután"),
    ("kh", "Camboya"), ("qa", "Catar"), ("cn", "China"), ("kp", "Corea del Norte"), ("kr", "Corea del Sur"),
    ("ae", "Emiratos Árabes Unidos"), ("ph", "Filipinas"), ("in", "India"), ("id", "Indonesia"),
    ("iq", "Irak"), ("ir", "Irán"), ("il", "Israel"), ("jp", "Japón"), ("jo", "Jordania"),
    ("kz", "Kazajistán"), ("kg", "Kirguistán"), ("kw", "Kuwait"), ("la", "Laos"), ("lb", "Líbano"),
    ("my", "Malasia"), ("mv", "Maldivas"), ("mn", "Mongolia"), ("mm", "Myanmar"), ("np", "Nepal"),
    ("om", "Omán"), ("pk", "Pakistán"), ("sg", "Singapur"), ("sy", "Siria"), ("lk", "Sri Lanka"),
    ("th", "Tailandia"), ("tw", "Taiwán"), ("tj", "Tayikistán"), ("tm", "Turkmenistán"),
    ("uz", "Uzbekistán"), ("vn", "Vietnam"), ("ye", "Yemen"),
)

AFRICAN_COUNTRIES = _pool(
    ("ao", "Angola"), ("dz", "Argelia"), ("bj", "Benín"), ("bw", "Botsuana"), ("bf", "Burkina Faso"),
    ("bi", "Burundi"), ("cv", "Cabo Verde"), ("cm", "Camerún"), ("td", "Chad"), ("ci", "Costa de Marfil"),
    ("eg", "Egipto"), ("er", "Eritrea"), ("et", "Etiopía"), ("ga", "Gabón"), ("gm", "Gambia"),
    ("gh", "Ghana"), ("gn", "Guinea"), ("gq", "Guinea Ecuatorial"), ("ke", "Kenia"), ("ls", "Lesoto"),
    ("lr", "Liberia"), ("ly", "Libia"), ("mg", "Madagascar"), ("mw", "Malaui"), ("ml", "Malí"),
    ("ma", "Marruecos"), ("mu", "Mauricio"), ("mr", "Mauritania"), ("mz", "Mozambique"),
    ("na", "Namibia"), ("ne", "Níger"), ("ng", "Nigeria"), ("cf", "República Centroafricana"),
    ("cd", "República Democrática del Congo"), ("rw", "Ruanda"), ("sn", "Senegal"),
    ("sl", "Sierra Leona"), ("so", "Somalia"), ("za", "Sudáfrica"), ("sd", "Sudán"),
    ("tz", "Tanzania"), ("tg", "Togo"), ("tn", "Túnez"), ("ug", "Uganda"), ("zm", "Zambia"),
    ("zw", "Zimbabue"),
)

AMERICAN_COUNTRIES = _pool(
    ("ar", "Argentina"), ("bz", "Belice"), ("bo", "Bolivia"), ("br", "Brasil"), ("ca", "Canadá"),
    ("cl", "Chile"), ("co", "Colombia"), ("cr", "Costa Rica"), ("ec", "Ecuador"), ("sv", "El Salvador"),
    ("us", "Estados Unidos"), ("gt", "Guatemala"), ("gy", "Guyana"), ("hn", "Honduras"),
    ("mx", "México"), ("ni", "Nicaragua"), ("pa", "Panamá"), ("py", "Paraguay"), ("pe", "Perú"),
    ("sr", "Surinam"), ("uy", "Uruguay"), ("ve", "Venezuela"),
)

OCEANIA_COUNTRIES = _pool(
    ("au", "Australia"), ("fj", "Fiyi"), ("mh", "Islas Marshall"), ("sb", "Islas Salomón"),
    ("ki", "Kiribati"), ("fm", "Micronesia"), ("nr", "Nauru"), ("nz", "Nueva Zelanda"), ("pw", "Palaos"),
    ("pg", "Papúa Nueva Guinea"), ("ws", "Samoa"), ("to", "Tonga"), ("tv", "Tuvalu"), ("vu", "Vanuatu"),
)

CARIBBEAN_COUNTRIES = _pool(
    ("ag", "Antigua y Barbuda"), ("bs", "Bahamas"), ("bb", "Barbados"), ("cu", "Cuba"),
    ("dm", "Dominica"), ("gd", "Granada"), ("ht", "Haití"), ("jm", "Jamaica"),
    ("do", "República Dominicana"), ("kn", "San Cristóbal y Nieves"),
    ("vc", "San Vicente y las Granadinas"), ("lc", "Santa Lucía"), ("tt", "Trinidad y Tobago"),
    ("pr", "Puerto Rico"),
)

_POPULOUS_CODES = (
    "in", "cn", "us", "id", "pk", "ng", "br", "bd", "ru", "et", "mx", "jp", "eg", "ph", "cd",
    "vn", "ir", "tr", "de", "th", "gb", "tz", "fr", "za", "it",
)


def _unique(*pools: list[Country]) -> list[Country]:
    seen: dict[str, Country] = {}
    for pool in pools:
        for c in pool:
            seen.setdefault(c.code, c)
    return list(seen.values())


ALL_WORLD_COUNTRIES = _unique(
    EUROPEAN_COUNTRIES, ASIAN_COUNTRIES, AFRICAN_COUNTRIES, AMERICAN_COUNTRIES,
    OCEANIA_COUNTRIES, CARIBBEAN_COUNTRIES,
)

_BY_CODE = {c.code: c for c in ALL_WORLD_COUNTRIES}

POPULOUS_COUNTRIES = [_BY_CODE[code] for code in _POPULOUS_CODES]
