# ISO 4217 currencies with display names and symbols: (code, name, symbol).
# Where no distinct symbol is in common use, the code itself is the symbol.
CURRENCY_REFERENCE: tuple[tuple[str, str, str], ...] = (
	('AED', 'United Arab Emirates Dirham', 'د.إ'),
	('AFN', 'Afghan Afghani', '؋'),
	('ALL', 'Albanian Lek', 'L'),
	('AMD', 'Armenian Dram', '֏'),
	('ANG', 'Netherlands Antillean Guilder', 'ƒ'),
	('AOA', 'Angolan Kwanza', 'Kz'),
	('ARS', 'Argentine Peso', '$'),
	('AUD', 'Australian Dollar', 'A$'),
	('AWG', 'Aruban Florin', 'ƒ'),
	('AZN', 'Azerbaijani Manat', '₼'),
	('BAM', 'Bosnia-Herzegovina Convertible Mark', 'KM'),
	('BBD', 'Barbadian Dollar', '$'),
	('BDT', 'Bangladeshi Taka', '৳'),
	('BGN', 'Bulgarian Lev', 'лв'),
	('BHD', 'Bahraini Dinar', '.د.ب'),
	('BIF', 'Burundian Franc', 'FBu'),
	('BMD', 'Bermudan Dollar', '$'),
	('BND', 'Brunei Dollar', '$'),
	('BOB', 'Bolivian Boliviano', 'Bs.'),
	('BRL', 'Brazilian Real', 'R$'),
	('BSD', 'Bahamian Dollar', '$'),
	('BTN', 'Bhutanese Ngultrum', 'Nu.'),
	('BWP', 'Botswanan Pula', 'P'),
	('BYN', 'Belarusian Ruble', 'Br'),
	('BZD', 'Belize Dollar', 'BZ$'),
	('CAD', 'Canadian Dollar', 'C$'),
	('CDF', 'Congolese Franc', 'FC'),
	('CHF', 'Swiss Franc', 'CHF'),
	('CLP', 'Chilean Peso', '$'),
	('CNY', 'Chinese Yuan', '¥'),
	('COP', 'Colombian Peso', '$'),
	('CRC', 'Costa Rican Colón', '₡'),
	('CUP', 'Cuban Peso', '$'),
	('CVE', 'Cape Verdean Escudo', '$'),
	('CZK', 'Czech Republic Koruna', 'Kč'),
	('DJF', 'Djiboutian Franc', 'Fdj'),
	('DKK', 'Danish Krone', 'kr'),
	('DOP', 'Dominican Peso', 'RD$'),
	('DZD', 'Algerian Dinar', 'د.ج'),
	('EGP', 'Egyptian Pound', 'E£'),
	('ERN', 'Eritrean Nakfa', 'Nfk'),
	('ETB', 'Ethiopian Birr', 'Br'),
	('EUR', 'Euro', '€'),
	('FJD', 'Fijian Dollar', 'FJ$'),
	('FKP', 'Falkland Islands Pound', '£'),
	('GBP', 'British Pound Sterling', '£'),
	('GEL', 'Georgian Lari', '₾'),
	('GHS', 'Ghanaian Cedi', '₵'),
	('GIP', 'Gibraltar Pound', '£'),
	('GMD', 'Gambian Dalasi', 'D'),
	('GNF', 'Guinean Franc', 'FG'),
	('GTQ', 'Guatemalan Quetzal', 'Q'),
	('GYD', 'Guyanaese Dollar', '$'),
	('HKD', 'Hong Kong Dollar', 'HK$'),
	('HNL', 'Honduran Lempira', 'L'),
	('HTG', 'Haitian Gourde', 'G'),
	('HUF', 'Hungarian Forint', 'Ft'),
	('IDR', 'Indonesian Rupiah', 'Rp'),
	('ILS', 'Israeli New Sheqel', '₪'),
	('INR', 'Indian Rupee', '₹'),
	('IQD', 'Iraqi Dinar', 'ع.د'),
	('IRR', 'Iranian Rial', '﷼'),
	('ISK', 'Icelandic Króna', 'kr'),
	('JMD', 'Jamaican Dollar', 'J$'),
	('JOD', 'Jordanian Dinar', 'JD'),
	('JPY', 'Japanese Yen', '¥'),
	('KES', 'Kenyan Shilling', 'KSh'),
	('KGS', 'Kyrgystani Som', 'с'),
	('KHR', 'Cambodian Riel', '៛'),
	('KMF', 'Comorian Franc', 'CF'),
	('KPW', 'North Korean Won', '₩'),
	('KRW', 'South Korean Won', '₩'),
	('KWD', 'Kuwaiti Dinar', 'KD'),
	('KYD', 'Cayman Islands Dollar', '$'),
	('KZT', 'Kazakhstani Tenge', '₸'),
	('LAK', 'Laotian Kip', '₭'),
	('LBP', 'Lebanese Pound', 'ل.ل'),
	('LKR', 'Sri Lankan Rupee', 'Rs'),
	('LRD', 'Liberian Dollar', '$'),
	('LSL', 'Lesotho Loti', 'L'),
	('LYD', 'Libyan Dinar', 'LD'),
	('MAD', 'Moroccan Dirham', 'د.م.'),
	('MDL', 'Moldovan Leu', 'L'),
	('MGA', 'Malagasy Ariary', 'Ar'),
	('MKD', 'Macedonian Denar', 'ден'),
	('MMK', 'Myanma Kyat', 'K'),
	('MNT', 'Mongolian Tugrik', '₮'),
	('MOP', 'Macanese Pataca', 'MOP$'),
	('MRU', 'Mauritanian Ouguiya', 'UM'),
	('MUR', 'Mauritian Rupee', '₨'),
	('MVR', 'Maldivian Rufiyaa', 'Rf'),
	('MWK', 'Malawian Kwacha', 'MK'),
	('MXN', 'Mexican Peso', 'MX$'),
	('MYR', 'Malaysian Ringgit', 'RM'),
	('MZN', 'Mozambican Metical', 'MT'),
	('NAD', 'Namibian Dollar', '$'),
	('NGN', 'Nigerian Naira', '₦'),
	('NIO', 'Nicaraguan Córdoba', 'C$'),
	('NOK', 'Norwegian Krone', 'kr'),
	('NPR', 'Nepalese Rupee', '₨'),
	('NZD', 'New Zealand Dollar', 'NZ$'),
	('OMR', 'Omani Rial', 'ر.ع.'),
	('PAB', 'Panamanian Balboa', 'B/.'),
	('PEN', 'Peruvian Nuevo Sol', 'S/'),
	('PGK', 'Papua New Guinean Kina', 'K'),
	('PHP', 'Philippine Peso', '₱'),
	('PKR', 'Pakistani Rupee', '₨'),
	('PLN', 'Polish Zloty', 'zł'),
	('PYG', 'Paraguayan Guarani', '₲'),
	('QAR', 'Qatari Rial', 'ر.ق'),
	('RON', 'Romanian Leu', 'lei'),
	('RSD', 'Serbian Dinar', 'дин.'),
	('RUB', 'Russian Ruble', '₽'),
	('RWF', 'Rwandan Franc', 'FRw'),
	('SAR', 'Saudi Riyal', 'ر.س'),
	('SBD', 'Solomon Islands Dollar', 'SI$'),
	('SCR', 'Seychellois Rupee', '₨'),
	('SDG', 'Sudanese Pound', 'ج.س.'),
	('SEK', 'Swedish Krona', 'kr'),
	('SGD', 'Singapore Dollar', 'S$'),
	('SHP', 'Saint Helena Pound', '£'),
	('SLE', 'Sierra Leonean Leone', 'Le'),
	('SOS', 'Somali Shilling', 'Sh'),
	('SRD', 'Surinamese Dollar', '$'),
	('SSP', 'South Sudanese Pound', '£'),
	('STN', 'São Tomé and Príncipe Dobra', 'Db'),
	('SVC', 'Salvadoran Colón', '₡'),
	('SYP', 'Syrian Pound', '£S'),
	('SZL', 'Swazi Lilangeni', 'E'),
	('THB', 'Thai Baht', '฿'),
	('TJS', 'Tajikistani Somoni', 'SM'),
	('TMT', 'Turkmenistani Manat', 'm'),
	('TND', 'Tunisian Dinar', 'د.ت'),
	('TOP', "Tongan Pa'anga", 'T$'),
	('TRY', 'Turkish Lira', '₺'),
	('TTD', 'Trinidad and Tobago Dollar', 'TT$'),
	('TWD', 'New Taiwan Dollar', 'NT$'),
	('TZS', 'Tanzanian Shilling', 'TSh'),
	('UAH', 'Ukrainian Hryvnia', '₴'),
	('UGX', 'Ugandan Shilling', 'USh'),
	('USD', 'United States Dollar', '$'),
	('UYU', 'Uruguayan Peso', '$U'),
	('UZS', 'Uzbekistan Som', 'soʻm'),
	('VES', 'Venezuelan Bolívar Soberano', 'Bs.S'),
	('VND', 'Vietnamese Dong', '₫'),
	('VUV', 'Vanuatu Vatu', 'VT'),
	('WST', 'Samoan Tala', 'WS$'),
	('XAF', 'CFA Franc BEAC', 'FCFA'),
	('XCD', 'East Caribbean Dollar', 'EC$'),
	('XOF', 'CFA Franc BCEAO', 'CFA'),
	('XPF', 'CFP Franc', '₣'),
	('YER', 'Yemeni Rial', '﷼'),
	('ZAR', 'South African Rand', 'R'),
	('ZMW', 'Zambian Kwacha', 'ZK'),
	('ZWL', 'Zimbabwean Dollar', 'Z$'),
)
